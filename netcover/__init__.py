"""Station/device coverage model with plot scaling."""

from .core import *  # noqa: F401,F403
from .core import __all__

__version__ = "0.1.0"
