#!/usr/bin/python3
# -*- coding: utf-8 -*-
"""Top-level executable shim.

Allows `cat subdomains.txt | python subdmtakeover.py` from a source checkout.
"""

import os
import sys

from subdmtakeover.cli import main
from subdmtakeover.core import SUBDMTAKEOVER, match_fingerprint
from subdmtakeover.version import __version__

__all__ = ["__version__", "SUBDMTAKEOVER", "match_fingerprint", "main"]

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        try:
            sys.exit(0)
        except SystemExit:
            os._exit(0)
