"""
Configuration for vk.

Settings are read from a YAML or JSON file, environment variables and the
command line, and validated with pydantic.
"""

from .loader import TOKEN_ENV_VARS, ConfigLoader, load_config, resolve_token
from .models import LoggingConfig, LogLevel, RetrySettings, VkConfig

__all__ = [
    "ConfigLoader",
    "load_config",
    "resolve_token",
    "TOKEN_ENV_VARS",
    "LoggingConfig",
    "LogLevel",
    "RetrySettings",
    "VkConfig",
]
