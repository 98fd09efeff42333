"""Typed representations of Folio content documents."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .dates import format_date, parse_date, to_iso_string

logger = logging.getLogger(__name__)

RECOGNIZED_FIELDS = ("title", "summary", "author", "published_at", "hero_image")


class ContentMeta(BaseModel):
    """Front-matter metadata for a document.

    Every recognized field is optional; absence is legal and simply leaves the
    attribute as ``None``. Fields the model does not know about are kept as
    extra attributes and surfaced through :attr:`extra_fields`.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    slug: str = Field(description="Filename-derived identifier, unique within a collection.")
    title: Optional[str] = Field(default=None, description="Display title.")
    summary: Optional[str] = Field(default=None, description="Short summary.")
    author: Optional[str] = Field(default=None, description="Author display name.")
    published_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("published_at", "date", "publicationDate"),
        description="Publication date as written in the source, expected to be date-parseable.",
    )
    hero_image: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("hero_image", "image", "heroImage"),
        description="Path or URL of the primary image.",
    )

    @field_validator("slug")
    def _require_slug(cls, value: str) -> str:
        if not value:
            raise ValueError("slug cannot be empty")
        return value

    @field_validator(*RECOGNIZED_FIELDS, mode="before")
    def _coerce_scalar(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (date, datetime)):
            return to_iso_string(value)
        if isinstance(value, (bool, int, float)):
            return str(value)
        logger.warning("Ignoring non-scalar metadata value of type %s.", type(value).__name__)
        return None

    @property
    def published_date(self) -> datetime | None:
        """Parsed publication date, or ``None`` when absent or unparseable."""
        return parse_date(self.published_at)

    @property
    def display_date(self) -> str | None:
        return format_date(self.published_at)

    @property
    def byline(self) -> str:
        """Author and formatted date joined for display, omitting absent parts."""
        parts = [part for part in (self.author, self.display_date) if part]
        return " / ".join(parts)

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class ContentDocument(BaseModel):
    """Full representation of a content item: metadata plus the untouched body."""

    model_config = ConfigDict(frozen=True)

    meta: ContentMeta = Field(description="Front-matter metadata.")
    body: str = Field(description="Raw markdown body.")

    @property
    def slug(self) -> str:
        return self.meta.slug
