"""Tagged results returned by the catalog service."""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    data: Any = None


@dataclass(frozen=True)
class Redirect:
    location: str


@dataclass(frozen=True)
class ValidationFailed:
    """Rejected submission: per-field messages plus the values to redisplay."""

    errors: dict[str, str]
    submitted: dict[str, str] = field(default_factory=dict)
    jersey_id: str | None = None


@dataclass(frozen=True)
class NotFound:
    message: str = "Jersey not found"


@dataclass(frozen=True)
class Unavailable:
    message: str = "The catalog is temporarily unavailable"


@dataclass(frozen=True)
class Forbidden:
    message: str = "You are not allowed to do that"


Outcome = Union[Ok, Redirect, ValidationFailed, NotFound, Unavailable, Forbidden]
