"""Public package surface for subdmtakeover.

Importing `subdmtakeover` exposes the high-level API function
(`SUBDMTAKEOVER`), the matcher and package version, keeping internals hidden
by default.
"""

from .core import PROVIDERS, SUBDMTAKEOVER, match_fingerprint
from .version import __version__

__all__ = ["PROVIDERS", "SUBDMTAKEOVER", "match_fingerprint", "__version__"]
