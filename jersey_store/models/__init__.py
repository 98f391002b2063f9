"""Database models package."""

from jersey_store.models.jersey import Jersey

__all__ = ["Jersey"]
