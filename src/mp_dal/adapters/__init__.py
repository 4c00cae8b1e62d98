"""Adapters – SQLAlchemy storage and FastAPI request/response wiring."""
