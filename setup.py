import os.path

from setuptools import find_packages, setup


def read(fname):
    path = os.path.join(os.path.dirname(__file__), fname)
    with open(path, "r") as rfile:
        return rfile.read()


metadata = {}
exec(read("src/requestable/__about__.py"), metadata)


setup(
    name="requestable",
    version=metadata["__version__"],
    description=metadata["__description__"],
    license="MIT",
    long_description=read("README.rst") + "\n\n" + read("HISTORY.rst"),
    author=metadata["__author__"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    install_requires=["aiohttp>=3.8"],
    extras_require={
        "httpx": ["httpx>=0.23"],
        "requests": ["requests>=2.25"],
        "test": [
            "pytest>=7",
            "pytest-mock>=3",
            "pytest-httpbin>=2",
            "aiohttp>=3.8",
            "httpx>=0.23",
            "requests>=2.25",
        ],
    },
    entry_points={
        "console_scripts": ["requestable=requestable.__main__:main"]
    },
    keywords=["api-wrapper", "http", "async", "rest"],
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
)
