from __future__ import annotations

"""Compatibility facade for the subdmtakeover engine.

Public imports remain stable while implementation lives in
`subdmtakeover.engine.runtime` and `subdmtakeover.engine.providers`.
"""

from .engine.runtime import *  # noqa: F401,F403
from .engine.runtime import _run_async, _run_coro_sync

__all__ = [
    "DNS_TIMEOUT",
    "HTTP_TIMEOUT",
    "MAX_CONCURRENCY",
    "PROVIDERS",
    "Provider",
    "TakeoverError",
    "ResolveError",
    "FetchError",
    "TakeoverScanner",
    "SUBDMTAKEOVER",
    "match_fingerprint",
    "logger",
    "_run_async",
    "_run_coro_sync",
]
