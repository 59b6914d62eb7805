"""
Runtime support: error model and configuration.
"""

from .errors import *
from .config import ServerConfig, ClientConfig
