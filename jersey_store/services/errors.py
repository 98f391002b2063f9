"""Catalog error taxonomy.

The store raises these; the catalog service turns them into outcomes so
that nothing below reaches the presentation layer as a raw exception.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class JerseyValidationError(CatalogError):
    """Submitted fields violate the jersey constraints."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class JerseyNotFoundError(CatalogError):
    """No jersey matches the identifier, or the identifier is malformed."""

    def __init__(self, jersey_id: object) -> None:
        self.jersey_id = jersey_id
        super().__init__(f"Jersey with id {jersey_id!r} not found")


class PersistenceUnavailableError(CatalogError):
    """The database could not be reached or a query failed unexpectedly."""
