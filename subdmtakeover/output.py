from __future__ import annotations

"""Terminal rendering helpers for subdmtakeover.

This module contains presentation-only logic: one line per scan result on
stdout, fatal messages on stderr. It does not perform network operations.
"""

from typing import Any, Dict

from rich.console import Console
from rich.markup import escape

# Lines must stay one-per-result when piped, so no wrapping or auto-highlight.
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

STAGE_ERROR_PREFIX = {
    "resolve": "Error resolving subdomain:",
    "fetch": "Error sending request:",
}


def format_result(result: Dict[str, Any]) -> str:
    """Build the rich markup line for one scan result."""
    subdomain = escape(str(result.get("subdomain") or "-"))
    error = result.get("error")
    if error:
        prefix = STAGE_ERROR_PREFIX.get(str(result.get("stage") or ""), "Error scanning subdomain:")
        return f"{prefix} {escape(str(error))}"

    ip = escape(str(result.get("ip") or "-"))
    if result.get("takeover"):
        provider = escape(str(result.get("provider") or "unknown"))
        return f"[red]Subdomain takeover detected:[/red] {subdomain} by {provider} at IP {ip}"
    return f"[green]No takeover detected:[/green] {subdomain} at IP {ip}"


def print_result(result: Dict[str, Any]) -> None:
    console.print(format_result(result))


def print_read_error(exc: BaseException) -> None:
    err_console.print(f"Error reading subdomains: {escape(str(exc))}")
