"""Reindeer observation marker pipeline."""

__version__ = "0.1.0"
