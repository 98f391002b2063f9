"""Catalog store: validated CRUD primitives for jerseys."""

import logging
import time
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jersey_store.database import Database
from jersey_store.models import Jersey
from jersey_store.schemas.jersey import JerseyFields, JerseyRead, field_errors
from jersey_store.services.errors import (
    JerseyNotFoundError,
    JerseyValidationError,
    PersistenceUnavailableError,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way it is stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_jersey_id(raw: object) -> str | None:
    """
    Normalize a client-supplied identifier.

    Args:
        raw: Identifier taken from a path or query string

    Returns:
        The canonical 32 character hex id, or None if ``raw`` is not a well-formed id
    """
    if not isinstance(raw, str):
        return None
    try:
        return uuid.UUID(raw.strip()).hex
    except ValueError:
        return None


class CatalogStore:
    """Persistence-backed CRUD for the Jersey entity.

    Every operation runs in its own short session against the injected
    ``Database`` handle and returns detached ``JerseyRead`` values.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self.database.session() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.exception("Database error during %s", action)
            raise PersistenceUnavailableError(f"Database error during {action}") from exc

    @staticmethod
    def _validate(fields: Mapping[str, Any]) -> JerseyFields:
        try:
            return JerseyFields.model_validate(dict(fields))
        except ValidationError as exc:
            raise JerseyValidationError(field_errors(exc)) from exc

    @staticmethod
    def _require_id(raw_id: object) -> str:
        jersey_id = parse_jersey_id(raw_id)
        if jersey_id is None:
            raise JerseyNotFoundError(raw_id)
        return jersey_id

    @staticmethod
    def _commit(session: Session, deadline: float | None) -> None:
        # Pending SQL runs first so only the commit itself can outlive the deadline
        session.flush()
        if deadline is not None and time.monotonic() > deadline:
            session.rollback()
            logger.error("Write abandoned: deadline passed before commit")
            raise PersistenceUnavailableError("Deadline passed before commit")
        session.commit()

    def create(self, fields: Mapping[str, Any], deadline: float | None = None) -> JerseyRead:
        """
        Validate and persist a new jersey.

        Args:
            fields: Submitted form or JSON fields
            deadline: ``time.monotonic()`` value after which the write is rolled back

        Raises:
            JerseyValidationError: A field is missing, empty or out of range
            PersistenceUnavailableError: The database failed
        """
        data = self._validate(fields)
        now = utcnow()
        row = Jersey(
            id=uuid.uuid4().hex,
            team=data.team,
            country=data.country,
            price=data.price,
            image_url=data.image_url,
            created_at=now,
            updated_at=now,
        )
        with self._session("create") as session:
            session.add(row)
            self._commit(session, deadline)
            jersey = JerseyRead.model_validate(row)

        logger.info("Created jersey %s (%s - %s)", jersey.id, jersey.team, jersey.country)
        return jersey

    def get_by_id(self, raw_id: object) -> JerseyRead:
        """Get a jersey by id. Malformed ids are reported as not found."""
        jersey_id = self._require_id(raw_id)
        with self._session("get") as session:
            row = session.get(Jersey, jersey_id)
            if row is None:
                raise JerseyNotFoundError(raw_id)
            return JerseyRead.model_validate(row)

    def list_all(self) -> list[JerseyRead]:
        """All jerseys, newest first."""
        with self._session("list") as session:
            rows = session.query(Jersey).order_by(Jersey.created_at.desc()).all()
            return [JerseyRead.model_validate(row) for row in rows]

    def update(
        self, raw_id: object, fields: Mapping[str, Any], deadline: float | None = None
    ) -> JerseyRead:
        """
        Replace every mutable field of an existing jersey.

        Raises:
            JerseyNotFoundError: No jersey matches ``raw_id``
            JerseyValidationError: The new fields are invalid
            PersistenceUnavailableError: The database failed
        """
        jersey_id = self._require_id(raw_id)
        with self._session("update") as session:
            row = session.get(Jersey, jersey_id)
            if row is None:
                raise JerseyNotFoundError(raw_id)

            data = self._validate(fields)
            row.team = data.team
            row.country = data.country
            row.price = data.price
            row.image_url = data.image_url
            # Never let updated_at move backwards, even if the clock does
            row.updated_at = max(utcnow(), row.updated_at)
            self._commit(session, deadline)
            jersey = JerseyRead.model_validate(row)

        logger.info("Updated jersey %s", jersey.id)
        return jersey

    def delete(self, raw_id: object, deadline: float | None = None) -> JerseyRead:
        """Hard-delete a jersey and return the removed value."""
        jersey_id = self._require_id(raw_id)
        with self._session("delete") as session:
            row = session.get(Jersey, jersey_id)
            if row is None:
                raise JerseyNotFoundError(raw_id)
            removed = JerseyRead.model_validate(row)
            session.delete(row)
            self._commit(session, deadline)

        logger.info("Deleted jersey %s", removed.id)
        return removed

    def count(self) -> int:
        """Number of stored jerseys."""
        with self._session("count") as session:
            return session.query(Jersey).count()
