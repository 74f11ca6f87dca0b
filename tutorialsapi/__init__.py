"""Tutorials API — CRUD service for tutorial records."""

__version__ = "1.0.0"
