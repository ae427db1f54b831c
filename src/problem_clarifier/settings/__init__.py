"""
Settings management module for Problem Clarifier.

This module provides configuration management including:
- Settings data model
- YAML-based configuration storage
- API key lookup from the environment or the system keyring
"""

from .models import OUTPUT_FORMATS, Settings
from .storage import API_KEY_ENV_VAR, SettingsStorage

__all__ = [
    "Settings",
    "OUTPUT_FORMATS",
    "SettingsStorage",
    "API_KEY_ENV_VAR",
]
