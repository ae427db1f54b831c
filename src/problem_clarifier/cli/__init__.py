"""
Problem Clarifier CLI Module

Contains the command-line interface:
- main: CLI entry point with typer
- Commands: clarify, config, version
- output: Rich rendering of clarification results
"""

from .main import app, main, run_clarification
from .output import OutputManager

__all__ = [
    "app",
    "main",
    "run_clarification",
    "OutputManager",
]
