"""taskkeeper: ownership-scoped task tracking service."""

__version__ = "0.1.0"
