"""Console utilities.

Thin wrappers around click output used by the publish pipeline: step
headers, informational lines, the confirmation prompt, and error-body
printing for registry rejections.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import click


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of the publish run in terminal output.
    """
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str = "") -> None:
    click.echo(msg)


def error(msg: str) -> None:
    click.echo(msg, err=True)


def confirm(lines: Sequence[str], *, assume_yes: bool = False) -> bool:
    """Show the publish report and ask the operator to go ahead.

    Args:
        lines: Report lines produced by ``pkgpush.report.render``.
        assume_yes: Skip the prompt and answer yes (``--yes``).

    Returns:
        True if publishing should proceed.
    """
    for line in lines:
        click.echo(line)
    if assume_yes:
        return True
    return click.confirm("Proceed?", default=False)


def report_error(status_code: int, body: Any) -> None:
    """Print a decoded registry error body.

    Registry errors look like ``{"message": "...", "errors": {...}}`` where
    ``errors`` maps field names to messages or to nested mappings of the
    same shape. Anything else is printed as-is.
    """
    if isinstance(body, Mapping):
        message = body.get("message")
        if message:
            error(f"  {message}")
        errors = body.get("errors")
        if isinstance(errors, Mapping):
            _print_errors(errors, depth=1)
        elif errors:
            error(f"  {errors}")
        if not message and not errors:
            error(f"  {dict(body)}")
    elif body:
        error(f"  {body}")
    else:
        error(f"  (no response body, status {status_code})")


def _print_errors(errors: Mapping[str, Any], depth: int) -> None:
    indent = "  " * depth
    for key, value in errors.items():
        if isinstance(value, Mapping):
            error(f"{indent}{key}:")
            _print_errors(value, depth + 1)
        else:
            error(f"{indent}{key}: {value}")
