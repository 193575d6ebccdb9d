from __future__ import annotations

"""Command-line interface for subdmtakeover.

Reads subdomains from stdin, scans them through `subdmtakeover.core` and
prints one line per subdomain as results arrive.
"""

import argparse
import os
import sys
from typing import Iterable, List, Optional, Sequence

from .core import _run_async, _run_coro_sync
from .output import err_console, print_read_error, print_result
from .version import __version__


def _read_subdomains(stream: Iterable[str]) -> List[str]:
    return [line.strip() for line in stream if line.strip()]


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint.

    Usage: `cat subdomains.txt | subdmtakeover`. There are no scan options;
    a failure while reading stdin aborts the run with exit code 1.
    """
    parser = argparse.ArgumentParser(
        prog="subdmtakeover",
        description=(
            f"subdmtakeover v.{__version__} - Subdomain takeover detection\n"
            "Reads newline-delimited subdomains from stdin."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args(argv)

    try:
        subdomains = _read_subdomains(sys.stdin)
    except (OSError, UnicodeDecodeError) as exc:
        print_read_error(exc)
        sys.exit(1)

    _run_coro_sync(_run_async(subdomains, result_callback=print_result))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        try:
            sys.exit(0)
        except SystemExit:
            os._exit(0)
