"""Utilities for parsing and typing content documents."""

from .dates import format_date, parse_date
from .models import ContentDocument, ContentMeta
from .parsers import (
    derive_identifier,
    normalize_metadata,
    parse_document,
    split_front_matter,
)

__all__ = [
    "ContentDocument",
    "ContentMeta",
    "derive_identifier",
    "format_date",
    "normalize_metadata",
    "parse_date",
    "parse_document",
    "split_front_matter",
]
