#!/usr/bin/env python3
"""
Problem Clarifier CLI

Command-line front end that routes between the two clarification paths:
- Service path: used when a Perplexity API key is configured
- Local path: heuristic template generator (no key, or --local)

Commands:
- problem-clarifier clarify <text>: Clarify a problem description
- problem-clarifier config ...: Configuration and API key management
- problem-clarifier version: Show version
"""

import asyncio
import json
import logging

import aiohttp
import keyring.errors
import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from ..core.generator import ClarificationGenerator
from ..core.models import ClarificationResult, GenerationMode
from ..llm.base import ServiceError
from ..llm.clarification import generate_via_service
from ..settings.models import OUTPUT_FORMATS, Settings
from ..settings.storage import SettingsStorage
from .output import OutputManager

app = typer.Typer(
    name="problem-clarifier",
    help="Problem Clarifier - turn messy ideas into clear problems",
    add_completion=False,
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration and API key management", no_args_is_help=True)
app.add_typer(config_app, name="config")

console = Console()
output = OutputManager(console)

SETTABLE_KEYS = ("provider", "model", "api_url", "default_mode", "output_format")


def _get_storage() -> SettingsStorage:
    """Create the settings storage used by all commands."""
    return SettingsStorage()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


async def run_clarification(
    text: str,
    mode: GenerationMode,
    api_key: str | None,
    settings: Settings,
    generator: ClarificationGenerator | None = None,
) -> ClarificationResult:
    """
    Clarify text with the service when a key is given, else locally.

    Service errors propagate; there is no automatic fallback.
    """
    if api_key:
        return await generate_via_service(
            api_key,
            text,
            model=settings.model,
            base_url=settings.api_url,
        )
    generator = generator or ClarificationGenerator()
    return generator.generate(text, mode)


@app.command()
def clarify(
    text: str = typer.Argument(..., help="Problem description (use '-' to read stdin)"),
    variation: bool = typer.Option(False, "--variation", "-r", help="Regenerate with alternate wording and order"),
    local: bool = typer.Option(False, "--local", "-l", help="Use the local generator even if an API key is set"),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format (rich, markdown, json)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Clarify a free-form problem description.

    Examples:
        problem-clarifier clarify "I can never find the right document in time"
        problem-clarifier clarify "Tools are too expensive" --variation
        echo "..." | problem-clarifier clarify - --format markdown
    """
    _configure_logging(verbose)

    if text == "-":
        text = typer.get_text_stream("stdin").read()

    if not text.strip():
        output.print_error("Problem description is empty")
        raise typer.Exit(1)

    storage = _get_storage()
    settings = storage.load()

    fmt = output_format or settings.output_format
    if fmt not in OUTPUT_FORMATS:
        output.print_error(f"Unknown format '{fmt}' (expected one of: {', '.join(OUTPUT_FORMATS)})")
        raise typer.Exit(2)

    mode = GenerationMode.VARIATION if variation else settings.default_mode
    api_key = None if local else storage.resolve_api_key(settings.provider)

    if fmt == "rich":
        source = f"{settings.provider} ({settings.model})" if api_key else f"local templates, {mode.value} mode"
        output.print_header("Problem Clarifier", f"Source: {source}")

    try:
        result = asyncio.run(run_clarification(text, mode, api_key, settings))
    except ServiceError as e:
        output.print_error(f"Failed to generate clarification: {e}")
        output.print_info("Check your API configuration, or rerun with --local")
        raise typer.Exit(1)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        output.print_error(f"Failed to reach {settings.provider}: {str(e) or type(e).__name__}")
        output.print_info("Check your network connection, or rerun with --local")
        raise typer.Exit(1)

    if fmt == "json":
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif fmt == "markdown":
        typer.echo(result.to_markdown())
    else:
        output.clarification(result)


@config_app.command("show")
def config_show():
    """Show current configuration."""
    storage = _get_storage()
    settings = storage.load()
    _, key_source = storage.find_api_key(settings.provider)
    output.config_display({
        "Provider": settings.provider,
        "Model": settings.model,
        "API URL": settings.api_url,
        "Default Mode": settings.default_mode.value,
        "Output Format": settings.output_format,
        "API Key": key_source is not None,
        "API Key Source": key_source or "(none)",
        "Config File": storage.config_file,
    })


@config_app.command("set")
def config_set(
    name: str = typer.Argument(..., help=f"Setting name ({', '.join(SETTABLE_KEYS)})"),
    value: str = typer.Argument(..., help="New value"),
):
    """Update a configuration value."""
    if name not in SETTABLE_KEYS:
        output.print_error(f"Unknown setting '{name}' (expected one of: {', '.join(SETTABLE_KEYS)})")
        raise typer.Exit(2)

    storage = _get_storage()
    settings = storage.load()

    if name == "default_mode":
        try:
            settings.default_mode = GenerationMode.parse(value)
        except ValueError as e:
            output.print_error(str(e))
            raise typer.Exit(2)
    elif name == "output_format":
        if value not in OUTPUT_FORMATS:
            output.print_error(f"Unknown format '{value}' (expected one of: {', '.join(OUTPUT_FORMATS)})")
            raise typer.Exit(2)
        settings.output_format = value
    else:
        setattr(settings, name, value)

    storage.save(settings)
    output.print_success(f"{name} set to: {value}")


@config_app.command("set-key")
def config_set_key(
    api_key: str = typer.Option(..., "--api-key", prompt=True, hide_input=True, help="Service API key"),
):
    """Store the service API key in the system keyring."""
    storage = _get_storage()
    settings = storage.load()
    try:
        storage.set_api_key(settings.provider, api_key)
    except keyring.errors.KeyringError as e:
        output.print_error(f"Could not store API key in the system keyring: {e}")
        raise typer.Exit(1)
    output.print_success(f"API key set for: {settings.provider}")


@config_app.command("delete-key")
def config_delete_key():
    """Remove the stored service API key."""
    storage = _get_storage()
    settings = storage.load()
    if storage.delete_api_key(settings.provider):
        output.print_success(f"API key removed for: {settings.provider}")
    else:
        output.print_info(f"No stored API key for: {settings.provider}")


@app.command()
def version():
    """Show version."""
    output.print(f"problem-clarifier {__version__}")


def main():
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
