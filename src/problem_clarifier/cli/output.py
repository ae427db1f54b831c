"""
Rich Terminal Output for Problem Clarifier CLI

Renders clarification results and status messages with the Rich library.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.models import ClarificationResult


class OutputManager:
    """
    Manages rich terminal output for the Problem Clarifier CLI.

    Provides consistent styling for:
    - Status messages (success, error, warning, info)
    - Clarification panels and bullet lists
    - Configuration tables
    """

    # Color scheme
    COLORS = {
        "primary": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "muted": "dim",
        "highlight": "cyan",
    }

    # Section titles and panel borders, in display order
    SECTIONS = [
        ("problem_statement", "Problem Statement", "blue"),
        ("problem_context", "Problem Context", "dim"),
        ("target_users", "Target Users", "cyan"),
        ("user_pain_points", "User Pain Points", "red"),
        ("solution_direction", "Solution Direction", "green"),
        ("key_features", "Key Features", "green"),
        ("assumptions_risks", "Assumptions & Risks", "yellow"),
        ("success_metrics", "Success Metrics", "magenta"),
        ("technical_considerations", "Technical Considerations", "cyan"),
        ("next_steps", "Next Steps", "blue"),
    ]

    def __init__(self, console: Console | None = None):
        """
        Initialize the output manager.

        Args:
            console: Rich Console instance (creates one if not provided)
        """
        self.console = console or Console()

    # ==================== Basic Output ====================

    def print(self, message: str = "", style: str | None = None) -> None:
        """Print a message with optional styling."""
        self.console.print(message, style=style)

    def print_header(self, title: str, subtitle: str | None = None) -> None:
        """Print a header with optional subtitle."""
        self.console.print()
        self.console.print(f"[bold blue]{escape(title)}[/bold blue]")
        if subtitle:
            self.console.print(f"[dim]{escape(subtitle)}[/dim]")
        self.console.print()

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]v[/green] {escape(message)}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]x[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[blue]i[/blue] {escape(message)}")

    # ==================== Clarification ====================

    def clarification(self, result: ClarificationResult) -> None:
        """
        Display a clarification as a sequence of panels.

        Empty sections are skipped; list fields render as bullets.
        """
        for name, title, border in self.SECTIONS:
            value = getattr(result, name)
            if not value:
                continue
            if isinstance(value, list):
                body = "\n".join(f"- {escape(str(item))}" for item in value)
            else:
                body = escape(str(value))
            self.console.print(Panel(body, title=title, border_style=border, title_align="left"))

        for key, value in result.extra.items():
            self.console.print(Panel(escape(str(value)), title=key, border_style="dim", title_align="left"))

    # ==================== Configuration ====================

    def config_display(self, config: dict[str, Any]) -> None:
        """
        Display configuration.

        Args:
            config: Configuration dictionary
        """
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in config.items():
            if key.lower() in ("api_key", "api key", "password", "secret"):
                value = "***" if value else "(not set)"
            table.add_row(key, str(value))

        self.console.print(table)
