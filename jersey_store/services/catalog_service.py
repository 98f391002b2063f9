"""Catalog service: one operation per user action."""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from jersey_store.schemas.jersey import submitted_values
from jersey_store.services.catalog_store import CatalogStore, parse_jersey_id
from jersey_store.services.errors import (
    JerseyNotFoundError,
    JerseyValidationError,
    PersistenceUnavailableError,
)
from jersey_store.services.outcomes import (
    Forbidden,
    NotFound,
    Ok,
    Outcome,
    Redirect,
    Unavailable,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIST_PATH = "/"
ADMIN_PATH = "/admin"

AuthorizePolicy = Callable[[str], bool]


def allow_all(action: str) -> bool:
    """Default authorization policy: admin actions are open to everyone."""
    return True


def detail_path(jersey_id: str) -> str:
    """URL of the detail page for a jersey."""
    return f"/jersey/{jersey_id}"


class CatalogService:
    """Translate user actions into store calls and tagged outcomes.

    Store calls run in a worker thread and are bounded by ``timeout``
    seconds, so a slow database never blocks the event loop. Writes also
    carry a deadline, and the store rolls them back instead of committing
    once it has passed. The service itself holds no state besides its
    collaborators.
    """

    def __init__(
        self,
        store: CatalogStore,
        timeout: float = 10.0,
        authorize: AuthorizePolicy = allow_all,
    ) -> None:
        self.store = store
        self.timeout = timeout
        self.authorize = authorize

    def _deadline(self) -> float:
        return time.monotonic() + self.timeout

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Store call %s timed out after %.1fs", func.__name__, self.timeout)
            raise PersistenceUnavailableError(f"{func.__name__} timed out") from exc

    def _denied(self, action: str) -> Forbidden | None:
        if self.authorize(action):
            return None
        logger.warning("Action %r rejected by authorization policy", action)
        return Forbidden()

    async def list_jerseys(self) -> Outcome:
        """List every jersey, newest first. An empty catalog is not an error."""
        try:
            jerseys = await self._call(self.store.list_all)
        except PersistenceUnavailableError:
            return Unavailable()
        return Ok(jerseys)

    async def get_jersey_detail(self, jersey_id: str) -> Outcome:
        """Fetch one jersey for its detail page."""
        try:
            jersey = await self._call(self.store.get_by_id, jersey_id)
        except JerseyNotFoundError:
            return NotFound()
        except PersistenceUnavailableError:
            return Unavailable()
        return Ok(jersey)

    async def show_admin_form(self, jersey_id: str | None = None) -> Outcome:
        """
        Blank form, or a form pre-filled with an existing jersey.

        An unknown id silently falls back to the blank form.
        """
        denied = self._denied("admin")
        if denied:
            return denied
        if not jersey_id:
            return Ok(None)

        try:
            jersey = await self._call(self.store.get_by_id, jersey_id)
        except JerseyNotFoundError:
            return Redirect(ADMIN_PATH)
        except PersistenceUnavailableError:
            return Unavailable()
        return Ok(jersey)

    async def create_jersey(self, fields: Mapping[str, Any]) -> Outcome:
        """Create a jersey and send the user back to the list."""
        denied = self._denied("create")
        if denied:
            return denied

        try:
            await self._call(self.store.create, fields, deadline=self._deadline())
        except JerseyValidationError as exc:
            return ValidationFailed(errors=exc.errors, submitted=submitted_values(fields))
        except PersistenceUnavailableError:
            return Unavailable()
        return Redirect(LIST_PATH)

    async def update_jersey(self, jersey_id: str, fields: Mapping[str, Any]) -> Outcome:
        """Replace a jersey's fields and send the user to its detail page."""
        denied = self._denied("update")
        if denied:
            return denied

        try:
            jersey = await self._call(
                self.store.update, jersey_id, fields, deadline=self._deadline()
            )
        except JerseyNotFoundError:
            return NotFound()
        except JerseyValidationError as exc:
            return ValidationFailed(
                errors=exc.errors,
                submitted=submitted_values(fields),
                jersey_id=parse_jersey_id(jersey_id),
            )
        except PersistenceUnavailableError:
            return Unavailable()
        return Redirect(detail_path(jersey.id))

    async def delete_jersey(self, jersey_id: str) -> Outcome:
        """Delete a jersey and send the user back to the list."""
        denied = self._denied("delete")
        if denied:
            return denied

        try:
            await self._call(self.store.delete, jersey_id, deadline=self._deadline())
        except JerseyNotFoundError:
            return NotFound()
        except PersistenceUnavailableError:
            return Unavailable()
        return Redirect(LIST_PATH)
