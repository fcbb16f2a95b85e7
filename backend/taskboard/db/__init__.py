"""Database Primitives: declarative Base and a standalone session factory."""
