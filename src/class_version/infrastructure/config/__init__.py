"""Infrastructure configuration module."""

from .application_config import FRONTENDS, STDOUT_TARGET, Config
from .frontend_config import get_config

__all__ = ["Config", "FRONTENDS", "STDOUT_TARGET", "get_config"]
