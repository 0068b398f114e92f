"""Infrastructure: SQLAlchemy adapters for the search ports, metadata registry, security."""
