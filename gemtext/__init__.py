"""GemText: a minimal markdown viewer and editor."""

__version__ = "1.0.0"
