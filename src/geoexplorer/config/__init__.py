"""
Configuration module for the explorer.
"""

from .settings import (
    ConfigurationError,
    ExplorerSettings,
    load_settings,
)

__all__ = [
    'ConfigurationError',
    'ExplorerSettings',
    'load_settings'
]
