"""Orbis Place profile API."""

__version__ = "1.0.0"
