"""Jersey schemas for request validation and read models."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Public (form) name of every client-supplied field, in display order
FORM_FIELDS = ("team", "country", "price", "imageUrl")

REQUIRED_MESSAGES = {
    "team": "Team name is required",
    "country": "Country name is required",
    "price": "Price is required",
    "imageUrl": "Image URL is required",
}

_FIELD_LABELS = {
    "team": "Team name",
    "country": "Country name",
    "price": "Price",
    "imageUrl": "Image URL",
}

_MISSING_TYPES = {"missing", "string_too_short"}


class JerseyFields(BaseModel):
    """Client-supplied jersey fields, used for both create and full update."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="ignore",
    )

    team: str = Field(..., min_length=1, max_length=200, description="Team name")
    country: str = Field(..., min_length=1, max_length=100, description="Country name")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Price in USD")
    image_url: str = Field(
        ..., alias="imageUrl", min_length=1, max_length=2000, description="Image URL or path"
    )


class JerseyRead(BaseModel):
    """Complete Jersey schema as stored."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(..., description="Opaque unique jersey identifier")
    team: str
    country: str
    price: float
    image_url: str
    created_at: datetime
    updated_at: datetime

    def as_form(self) -> dict[str, str]:
        """Field values keyed by form name, for pre-filling the admin form."""
        return {
            "team": self.team,
            "country": self.country,
            "price": f"{self.price:.2f}",
            "imageUrl": self.image_url,
        }


def _public_name(loc: tuple[Any, ...]) -> str:
    name = str(loc[0]) if loc else ""
    return "imageUrl" if name == "image_url" else name


def _message_for(field: str, error: Mapping[str, Any]) -> str:
    error_type = error.get("type", "")
    raw = error.get("input")
    if error_type in _MISSING_TYPES or raw is None or (isinstance(raw, str) and not raw.strip()):
        return REQUIRED_MESSAGES.get(field, f"{field} is required")
    if field == "price":
        if error_type == "greater_than_equal":
            return "Price cannot be negative"
        return "Price must be a valid number"
    if error_type == "string_too_long":
        return f"{_FIELD_LABELS.get(field, field)} is too long"
    return f"{_FIELD_LABELS.get(field, field)} is invalid"


def field_errors(exc: ValidationError) -> dict[str, str]:
    """
    Flatten a pydantic ValidationError into one message per form field.

    Args:
        exc: Error raised while validating JerseyFields

    Returns:
        Mapping of form field name to a human readable message
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = _public_name(tuple(error.get("loc", ())))
        errors.setdefault(field, _message_for(field, error))
    return errors


def submitted_values(fields: Mapping[str, Any]) -> dict[str, str]:
    """Raw submitted values keyed by form name, for redisplaying a rejected form."""
    values: dict[str, str] = {}
    for name in FORM_FIELDS:
        raw = fields.get(name)
        if raw is None and name == "imageUrl":
            raw = fields.get("image_url")
        values[name] = "" if raw is None else str(raw)
    return values
