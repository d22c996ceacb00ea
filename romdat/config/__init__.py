"""Configuration loading and validation."""

from .loader import ConfigError, get_config_value, load_config
from .validator import ValidationError, validate_config

__all__ = [
    'ConfigError',
    'ValidationError',
    'get_config_value',
    'load_config',
    'validate_config',
]
