"""Database plumbing shared by SQLAlchemy adapters: engine, metadata, types."""
