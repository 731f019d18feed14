"""Metlink vehicle positions to Cursor-on-Target map features."""

__version__ = "0.1.0"
