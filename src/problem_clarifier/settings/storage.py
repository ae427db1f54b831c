"""
Settings storage management for Problem Clarifier.

This module provides YAML-based configuration file persistence with:
- Automatic directory creation
- Enum-aware dataclass serialization
- Default Settings when no configuration exists
- API key lookup from the environment, then the system keyring
"""

import logging
import os
from pathlib import Path
from typing import Any

import keyring
import keyring.errors
import yaml

from ..core.models import GenerationMode
from .models import OUTPUT_FORMATS, Settings

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "PERPLEXITY_API_KEY"


class SettingsStorage:
    """
    Settings storage manager.

    Configuration is stored at ~/.problem-clarifier/config.yaml by default.
    API keys never touch the YAML file.

    Attributes:
        config_dir: Directory path for configuration files.
        config_file: Path to the main configuration file.
    """

    KEYRING_SERVICE = "problem-clarifier"

    def __init__(self, config_dir: Path | None = None) -> None:
        """
        Initialize the settings storage.

        Args:
            config_dir: Optional path to configuration directory.
                       Defaults to ~/.problem-clarifier/
        """
        self.config_dir = config_dir or Path.home() / ".problem-clarifier"
        self.config_file = self.config_dir / "config.yaml"

    def load(self) -> Settings:
        """
        Load settings from the configuration file.

        Returns:
            Settings loaded from the config file, or default Settings
            if the configuration file does not exist.
        """
        if not self.config_file.exists():
            return Settings()

        with open(self.config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed configuration file %s", self.config_file)
            return Settings()

        return self._dict_to_settings(data)

    def save(self, settings: Settings) -> None:
        """
        Save settings to the configuration file.

        Args:
            settings: Settings object to save.
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.dump(
                self._settings_to_dict(settings),
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )

    def _settings_to_dict(self, settings: Settings) -> dict[str, Any]:
        """Convert Settings to a YAML-safe dictionary."""
        return {
            "provider": settings.provider,
            "model": settings.model,
            "api_url": settings.api_url,
            "default_mode": settings.default_mode.value,
            "output_format": settings.output_format,
        }

    def _dict_to_settings(self, data: dict[str, Any]) -> Settings:
        """
        Convert a dictionary to Settings.

        Unknown keys are ignored; invalid values fall back to defaults.
        """
        defaults = Settings()

        default_mode = defaults.default_mode
        if "default_mode" in data:
            try:
                default_mode = GenerationMode.parse(data["default_mode"])
            except ValueError:
                logger.warning("Invalid default_mode %r, using %s", data["default_mode"], default_mode.value)

        output_format = data.get("output_format", defaults.output_format)
        if output_format not in OUTPUT_FORMATS:
            logger.warning("Invalid output_format %r, using %s", output_format, defaults.output_format)
            output_format = defaults.output_format

        return Settings(
            provider=str(data.get("provider") or defaults.provider),
            model=str(data.get("model") or defaults.model),
            api_url=str(data.get("api_url") or defaults.api_url),
            default_mode=default_mode,
            output_format=output_format,
        )

    # ========================================================================
    # API Key Management
    # ========================================================================

    def find_api_key(self, provider: str = "perplexity") -> tuple[str | None, str | None]:
        """
        Find the API key for the service path and report where it came from.

        The PERPLEXITY_API_KEY environment variable wins over the keyring.
        Blank values count as missing.

        Returns:
            ``(key, source)`` where source is ``"env"`` or ``"keyring"``,
            or ``(None, None)`` when the local generator should be used.
        """
        env_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
        if env_key:
            return env_key, "env"

        stored = self.get_api_key(provider)
        if stored and stored.strip():
            return stored.strip(), "keyring"
        return None, None

    def resolve_api_key(self, provider: str = "perplexity") -> str | None:
        """Return the API key to route with, or None for the local path."""
        return self.find_api_key(provider)[0]

    def get_api_key(self, provider: str) -> str | None:
        """Read the stored key; an unusable keyring reads as no key."""
        try:
            return keyring.get_password(self.KEYRING_SERVICE, provider)
        except keyring.errors.KeyringError as e:
            logger.warning("Could not read %s key from the system keyring: %s", provider, e)
            return None

    def set_api_key(self, provider: str, api_key: str) -> None:
        """
        Store a key in the system keyring under the provider name.

        Keyring errors propagate so the CLI can report them.
        """
        keyring.set_password(self.KEYRING_SERVICE, provider, api_key.strip())
        logger.debug("Stored %s key in the system keyring", provider)

    def delete_api_key(self, provider: str) -> bool:
        """
        Remove the stored key for a provider.

        Returns:
            True if a key was removed, False if there was none to remove
            or the keyring could not be reached.
        """
        try:
            keyring.delete_password(self.KEYRING_SERVICE, provider)
        except keyring.errors.PasswordDeleteError:
            return False
        except keyring.errors.KeyringError as e:
            logger.warning("Could not remove %s key from the system keyring: %s", provider, e)
            return False
        logger.debug("Removed %s key from the system keyring", provider)
        return True

    def has_api_key(self, provider: str = "perplexity") -> bool:
        """Check whether any API key (env or keyring) is available."""
        return self.resolve_api_key(provider) is not None
