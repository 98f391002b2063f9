"""Pydantic schemas package."""

from jersey_store.schemas.jersey import JerseyFields, JerseyRead, field_errors, submitted_values

__all__ = ["JerseyFields", "JerseyRead", "field_errors", "submitted_values"]
