"""Database package — SQLAlchemy declarative Base shared by every ORM model."""
