"""Quiz generation and scoring backend."""

__version__ = "0.1.0"
