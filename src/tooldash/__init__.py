"""Access-control service for the tooling operations dashboard."""

__version__ = "0.1.0"
