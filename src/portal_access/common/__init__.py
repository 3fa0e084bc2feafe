"""Common utilities shared across the access-control engine."""

__all__ = [
    "logging",
]
