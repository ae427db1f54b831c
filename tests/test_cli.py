"""Tests for the problem-clarifier CLI."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import aiohttp
import keyring.errors
import pytest
from typer.testing import CliRunner

from problem_clarifier import __version__
from problem_clarifier.cli.main import app
from problem_clarifier.core.models import ClarificationResult
from problem_clarifier.llm.base import ServiceHttpError

runner = CliRunner()


@pytest.fixture
def cli_storage(storage, no_env_key):
    """Point the CLI at a temporary config dir with an empty keyring."""
    with patch("problem_clarifier.cli.main._get_storage", return_value=storage), \
         patch("keyring.get_password", return_value=None):
        yield storage


@pytest.fixture
def service_mock():
    """Replace the service adapter."""
    reply = ClarificationResult(problem_statement="From the service", key_features=["Remote"])
    with patch("problem_clarifier.cli.main.generate_via_service", new=AsyncMock(return_value=reply)) as mock:
        yield mock


class TestClarifyCommand:
    """Tests for the clarify command."""

    def test_local_json(self, cli_storage, service_mock):
        """Without a key the local generator answers."""
        result = runner.invoke(app, ["clarify", "I need to organize my tasks and schedule better", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["targetUsers"].startswith("Knowledge workers, freelancers, and small team leads")
        service_mock.assert_not_called()

    def test_variation_flag(self, cli_storage, service_mock):
        """--variation selects the alternate wording."""
        result = runner.invoke(
            app, ["clarify", "I need to organize my tasks and schedule better", "--variation", "-f", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["targetUsers"].startswith("Remote-first teams")

    def test_service_used_with_key(self, cli_storage, service_mock, monkeypatch):
        """A configured key routes to the service."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")

        result = runner.invoke(app, ["clarify", "Anything at all", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["problemStatement"] == "From the service"
        service_mock.assert_awaited_once()
        assert service_mock.await_args.args == ("pplx-env", "Anything at all")

    def test_local_flag_skips_service(self, cli_storage, service_mock, monkeypatch):
        """--local ignores a configured key."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")

        result = runner.invoke(app, ["clarify", "This tool is too expensive", "--local", "-f", "json"])

        assert result.exit_code == 0
        assert "Robust free tier with core functionality" in json.loads(result.stdout)["keyFeatures"]
        service_mock.assert_not_called()

    def test_service_error(self, cli_storage, monkeypatch):
        """Service failures exit with code 1 and no fallback."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
        error = ServiceHttpError("Perplexity API error (401): bad key", status_code=401, body="bad key")

        with patch("problem_clarifier.cli.main.generate_via_service", new=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["clarify", "Anything", "-f", "json"])

        assert result.exit_code == 1
        assert "Failed to generate clarification" in result.output

    def test_structured_service_items(self, cli_storage, monkeypatch):
        """Object-valued items from the service render and stay intact in JSON."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
        reply = ClarificationResult.from_dict({"userPainPoints": [{"title": "Slow"}]})

        with patch("problem_clarifier.cli.main.generate_via_service", new=AsyncMock(return_value=reply)):
            rich_result = runner.invoke(app, ["clarify", "Anything"])
            json_result = runner.invoke(app, ["clarify", "Anything", "-f", "json"])

        assert rich_result.exit_code == 0
        assert "Slow" in rich_result.stdout
        assert json.loads(json_result.stdout)["userPainPoints"] == [{"title": "Slow"}]

    def test_transport_error(self, cli_storage, monkeypatch):
        """Connection failures are reported with the --local hint."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
        error = aiohttp.ClientConnectionError("Cannot connect to host api.perplexity.ai")

        with patch("problem_clarifier.cli.main.generate_via_service", new=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["clarify", "Anything", "-f", "json"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, aiohttp.ClientError)
        assert "Cannot connect to host" in result.output
        assert "--local" in result.output

    def test_timeout_error(self, cli_storage, monkeypatch):
        """A timed-out request exits with code 1 and names the timeout."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")

        with patch(
            "problem_clarifier.cli.main.generate_via_service",
            new=AsyncMock(side_effect=asyncio.TimeoutError()),
        ):
            result = runner.invoke(app, ["clarify", "Anything", "-f", "json"])

        assert result.exit_code == 1
        assert "TimeoutError" in result.output

    def test_blank_input(self, cli_storage):
        """Blank input is rejected."""
        result = runner.invoke(app, ["clarify", "   "])

        assert result.exit_code == 1
        assert "empty" in result.output

    def test_stdin_input(self, cli_storage):
        """'-' reads the description from stdin."""
        result = runner.invoke(app, ["clarify", "-", "-f", "markdown"], input="This tool is too expensive\n")

        assert result.exit_code == 0
        assert "## Key Features" in result.stdout
        assert "- Robust free tier with core functionality" in result.stdout

    def test_rich_output(self, cli_storage):
        """Default rich output shows section panels."""
        result = runner.invoke(app, ["clarify", "This tool is too expensive"])

        assert result.exit_code == 0
        assert "Problem Statement" in result.stdout
        assert "local templates" in result.stdout

    def test_unknown_format(self, cli_storage):
        """Unknown output formats are rejected."""
        result = runner.invoke(app, ["clarify", "anything", "-f", "html"])

        assert result.exit_code == 2


class TestConfigCommands:
    """Tests for config subcommands."""

    def test_set_and_show(self, cli_storage):
        """config set persists and config show displays it."""
        result = runner.invoke(app, ["config", "set", "default_mode", "variation"])
        assert result.exit_code == 0

        assert cli_storage.load().default_mode.value == "variation"

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "variation" in result.stdout

    def test_set_unknown_key(self, cli_storage):
        """Unknown setting names are rejected."""
        result = runner.invoke(app, ["config", "set", "theme", "dark"])

        assert result.exit_code == 2

    def test_set_invalid_mode(self, cli_storage):
        """Invalid mode values are rejected."""
        result = runner.invoke(app, ["config", "set", "default_mode", "wild"])

        assert result.exit_code == 2
        assert cli_storage.load().default_mode.value == "standard"

    def test_set_key(self, cli_storage):
        """config set-key stores the key in the keyring."""
        with patch("keyring.set_password") as set_password:
            result = runner.invoke(app, ["config", "set-key", "--api-key", "pplx-new"])

        assert result.exit_code == 0
        set_password.assert_called_once_with("problem-clarifier", "perplexity", "pplx-new")

    def test_delete_key(self, cli_storage):
        """config delete-key removes the stored key."""
        with patch("keyring.delete_password") as delete_password:
            result = runner.invoke(app, ["config", "delete-key"])

        assert result.exit_code == 0
        delete_password.assert_called_once_with("problem-clarifier", "perplexity")

    def test_set_value_with_markup(self, cli_storage):
        """Values that look like Rich markup are printed literally."""
        result = runner.invoke(app, ["config", "set", "model", "[x]"])

        assert result.exit_code == 0
        assert "model set to: [x]" in result.stdout
        assert cli_storage.load().model == "[x]"

    def test_show_key_source(self, cli_storage, monkeypatch):
        """config show reports where the API key comes from."""
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "API Key Source" in result.stdout
        assert "env" in result.stdout
        assert "pplx-env" not in result.stdout

    def test_set_key_keyring_unavailable(self, cli_storage):
        """A keyring failure while storing is reported, not raised."""
        error = keyring.errors.KeyringError("no backend")
        with patch("keyring.set_password", side_effect=error):
            result = runner.invoke(app, ["config", "set-key", "--api-key", "pplx-new"])

        assert result.exit_code == 1
        assert "Could not store API key" in result.output

    def test_delete_missing_key(self, cli_storage):
        """Deleting when nothing is stored says so."""
        with patch("keyring.delete_password", side_effect=keyring.errors.PasswordDeleteError()):
            result = runner.invoke(app, ["config", "delete-key"])

        assert result.exit_code == 0
        assert "No stored API key" in result.stdout


def test_version():
    """version prints the package version."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
