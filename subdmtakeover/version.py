"""Version information for subdmtakeover."""

__version__ = "1.0.0"
