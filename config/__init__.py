"""Configuration package for envseal.

Application code imports from `config.settings`; the constants are
re-exported here so `from config import KEY_LENGTH` keeps working.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
