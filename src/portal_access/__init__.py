"""Role- and status-based access control for the research submission portal."""

__version__ = "0.1.0"
