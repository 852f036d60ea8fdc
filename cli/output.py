"""Output formatting utilities for CLI."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.syntax import Syntax

from sqlgen.models import GenerationResult

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Send library logging to stderr, including debug output when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def format_result_json(result: GenerationResult, pretty: bool = False) -> str:
    """Format a result the way the generation endpoints report it.

    Args:
        result: Generation result
        pretty: Whether to pretty-print with indentation

    Returns:
        ``{"success": true, "generatedSQL": ...}`` or ``{"success": false, "message": ...}``
    """
    data: dict[str, Any]
    if result.success:
        data = {"success": True, "generatedSQL": result.script}
    else:
        detail = result.error.detail if result.error else "Unknown error"
        data = {"success": False, "message": detail}
    return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)


def output_script(script: str, output_path: Path | None = None, output_format: str = "sql") -> None:
    """Write a script to a file or print it to stdout.

    Args:
        script: Text to output (SQL or JSON)
        output_path: Output file path (None = stdout)
        output_format: sql or json, used for syntax highlighting
    """
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(script, encoding="utf-8")
        typer.secho(f"✓ Script written to {output_path}", fg=typer.colors.GREEN)
    else:
        lexer = "json" if output_format == "json" else "sql"
        console.print(Syntax(script, lexer, theme="monokai", line_numbers=False))


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def success_message(message: str) -> None:
    """Print success message.

    Args:
        message: Success message
    """
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
