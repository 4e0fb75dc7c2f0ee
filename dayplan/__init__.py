"""Daily plan composition and scheduling engine."""

__version__ = "0.1.0"
