"""Notes service: a small CRUD API over a single PostgreSQL table."""

__version__ = "1.0.0"
