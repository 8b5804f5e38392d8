"""Task collection service (FastAPI + SQLAlchemy)."""
