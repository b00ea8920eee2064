"""Telecom provider billing, subscription, usage and support data model."""

__version__ = "1.0.0"
