"""Monorepo version resolution and release publishing."""

__version__ = "0.3.0"
