"""
CLI Output Utilities

JSON output for scripts, rich output for people.
"""

import json
from typing import Any, Optional

import typer
from rich.console import Console

_console = Console()


def get_console() -> Console:
    return _console


def print_json(data: Any, minified: bool = False) -> None:
    """Print JSON on stdout (stderr carries logs)."""
    if minified:
        typer.echo(json.dumps(data, separators=(',', ':')))
    else:
        typer.echo(json.dumps(data, indent=2))


def structured_error(code: str, message: str, input_value: Optional[str] = None,
                     suggestions: Optional[list] = None) -> dict:
    """
    Create a structured error object for --json output.

    Args:
        code: Error code (e.g., "gem_not_found", "file_not_found")
        message: Human-readable error message
        input_value: The input that caused the error
        suggestions: List of alternative suggestions

    Returns:
        Structured error dictionary
    """
    error_obj = {
        "status": "error",
        "code": code,
        "message": message
    }
    if input_value:
        error_obj["input"] = input_value
    if suggestions:
        error_obj["suggestions"] = suggestions
    return error_obj


def print_error(message: str, code: Optional[str] = None, json_output: bool = False,
                input_value: Optional[str] = None) -> None:
    if json_output:
        print_json(structured_error(code or "error", message, input_value))
    else:
        typer.echo(f"Error: {message}", err=True)
