"""Tests for SettingsStorage YAML persistence and API key lookup."""

from unittest.mock import patch

import keyring.errors
import pytest
import yaml

from problem_clarifier.core.models import GenerationMode
from problem_clarifier.settings.models import Settings


class TestSettingsPersistence:
    """Tests for loading and saving settings."""

    def test_load_defaults_when_missing(self, storage):
        """No config file yields default Settings."""
        settings = storage.load()

        assert settings == Settings()
        assert not storage.config_file.exists()

    def test_save_and_load(self, storage):
        """Settings round-trip through the YAML file."""
        settings = Settings(model="sonar", default_mode=GenerationMode.VARIATION, output_format="json")

        storage.save(settings)
        loaded = storage.load()

        assert loaded == settings
        raw = yaml.safe_load(storage.config_file.read_text(encoding="utf-8"))
        assert raw["default_mode"] == "variation"

    def test_invalid_values_fall_back(self, storage):
        """Bad values are replaced by defaults and unknown keys ignored."""
        storage.config_dir.mkdir(parents=True)
        storage.config_file.write_text(
            "model: sonar\ndefault_mode: chaotic\noutput_format: html\ntheme: dark\n",
            encoding="utf-8",
        )

        settings = storage.load()

        assert settings.model == "sonar"
        assert settings.default_mode == GenerationMode.STANDARD
        assert settings.output_format == "rich"

    def test_non_mapping_file(self, storage):
        """A YAML list is ignored."""
        storage.config_dir.mkdir(parents=True)
        storage.config_file.write_text("- a\n- b\n", encoding="utf-8")

        assert storage.load() == Settings()


class TestApiKeys:
    """Tests for API key resolution."""

    def test_env_wins_over_keyring(self, storage, monkeypatch):
        """The environment variable takes precedence."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")

        with patch("keyring.get_password", return_value="pplx-keyring") as get_password:
            assert storage.resolve_api_key() == "pplx-env"

        get_password.assert_not_called()

    def test_keyring_fallback(self, storage, no_env_key):
        """The keyring is consulted when the environment is empty."""
        with patch("keyring.get_password", return_value="pplx-keyring") as get_password:
            assert storage.resolve_api_key() == "pplx-keyring"

        get_password.assert_called_once_with("problem-clarifier", "perplexity")

    def test_no_key(self, storage, no_env_key):
        """No key anywhere routes to the local generator."""
        with patch("keyring.get_password", return_value=None):
            assert storage.resolve_api_key() is None
            assert storage.has_api_key() is False

    def test_blank_env_is_ignored(self, storage, monkeypatch):
        """A whitespace-only env var does not count as a key."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "   ")

        with patch("keyring.get_password", return_value=""):
            assert storage.resolve_api_key() is None

    def test_find_api_key_reports_source(self, storage, no_env_key, monkeypatch):
        """The key comes back with the place it was found."""
        with patch("keyring.get_password", return_value=" pplx-keyring \n"):
            assert storage.find_api_key() == ("pplx-keyring", "keyring")

            monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
            assert storage.find_api_key() == ("pplx-env", "env")

    def test_find_api_key_none(self, storage, no_env_key):
        """With no key anywhere both parts are None."""
        with patch("keyring.get_password", return_value=None):
            assert storage.find_api_key() == (None, None)

    def test_keyring_unavailable(self, storage, no_env_key):
        """Keyring errors are treated as no key."""
        with patch("keyring.get_password", side_effect=keyring.errors.KeyringError("locked")):
            assert storage.get_api_key("perplexity") is None

    def test_set_api_key(self, storage):
        """Keys are stored under the service name."""
        with patch("keyring.set_password") as set_password:
            storage.set_api_key("perplexity", "pplx-new")

        set_password.assert_called_once_with("problem-clarifier", "perplexity", "pplx-new")

    def test_delete_missing_key(self, storage):
        """Deleting a key that does not exist is not an error."""
        with patch("keyring.delete_password", side_effect=keyring.errors.PasswordDeleteError()):
            assert storage.delete_api_key("perplexity") is False

    def test_delete_existing_key(self, storage):
        """Removing a stored key reports success."""
        with patch("keyring.delete_password") as delete_password:
            assert storage.delete_api_key("perplexity") is True

        delete_password.assert_called_once_with("problem-clarifier", "perplexity")

    def test_set_api_key_propagates_keyring_errors(self, storage):
        """Write failures reach the caller."""
        with patch("keyring.set_password", side_effect=keyring.errors.KeyringError("no backend")):
            with pytest.raises(keyring.errors.KeyringError):
                storage.set_api_key("perplexity", "pplx-new")
