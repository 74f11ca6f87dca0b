"""SQLAlchemy ORM models — one file per table."""

from tutorialsapi.models.tutorial import Tutorial

__all__ = [
    "Tutorial",
]
