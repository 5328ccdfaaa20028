"""Lesson record as returned by every lesson store."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showcase.utils.dates import parse_timestamp


class Lesson(BaseModel):
    """A published lesson document.

    Store documents use `_id` and `publishedAt`; both the aliases and the
    Python field names are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(..., alias="_id", description="Unique immutable document identifier")
    title: str | None = Field(None, description="Display title")
    published_at: datetime = Field(..., alias="publishedAt", description="Publication timestamp")

    @field_validator("published_at", mode="before")
    @classmethod
    def normalize_published_at(cls, v):
        if not isinstance(v, (str, datetime)):
            raise ValueError(f"invalid publishedAt timestamp: {v!r}")
        parsed = parse_timestamp(v)
        if parsed is None:
            raise ValueError(f"invalid publishedAt timestamp: {v!r}")
        return parsed

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Key for the `(publishedAt, id)` ordering."""
        return (self.published_at, self.id)
