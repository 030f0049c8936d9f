"""Access-control policy engine and enforcement API for the intranet portal."""

__version__ = "1.0.0"
