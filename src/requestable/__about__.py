__version__ = "0.3.0"
__author__ = "Ryo Yamada"
__description__ = "Typed, declarative HTTP request descriptors"
__all__ = ["__version__", "__author__", "__description__"]
