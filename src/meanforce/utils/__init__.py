"""
Utilities module for meanforce.

This module provides helper functions and configuration management.
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG
from .helpers import update_dict_recursively, ensure_directory

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG',
    'update_dict_recursively',
    'ensure_directory',
]
