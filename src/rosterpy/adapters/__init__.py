"""Adapters wiring the import core to SQLAlchemy, httpx and in-memory sources."""
