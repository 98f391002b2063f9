"""Services package."""

from jersey_store.services.catalog_service import CatalogService, allow_all
from jersey_store.services.catalog_store import CatalogStore

__all__ = ["CatalogService", "CatalogStore", "allow_all"]
