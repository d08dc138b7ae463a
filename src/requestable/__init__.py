"""
The entire public API is available at root level::

    from requestable import Descriptor, Dispatcher, GET, Success, ...
"""

from . import clients, github, http
from .__about__ import *  # noqa
from .clients import *  # noqa
from .descriptor import *  # noqa
from .dispatch import *  # noqa
from .errors import *  # noqa
from .http import *  # noqa
from .outcome import *  # noqa

__all__ = ["clients", "github", "http"]
