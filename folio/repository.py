"""Assemble collections of content documents into ordered listings and lookups."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from math import ceil
from typing import Iterable, Sequence

from .content import ContentDocument, ContentMeta, derive_identifier, parse_document
from .content.parsers import normalize_metadata, split_front_matter
from .storage import DocumentStore, scan_collection

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_RECENT_LIMIT = 4

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class DuplicateIdentifierError(ValueError):
    """Raised when two entries in a collection derive the same slug."""

    def __init__(self, collection: str, duplicates: Sequence[str]) -> None:
        joined = ", ".join(duplicates)
        super().__init__(f"Collection '{collection}' has duplicate identifiers: {joined}")
        self.collection = collection
        self.duplicates = list(duplicates)


@dataclass(frozen=True, slots=True)
class ListingPage:
    """One page of a sorted collection listing."""

    collection: str
    number: int
    page_size: int
    total_items: int
    items: list[ContentMeta] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return max(1, ceil(self.total_items / self.page_size))

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 1


class ContentRepository:
    """Read-only view over the collections held by a document store.

    Every call rebuilds its documents from the store; nothing is cached
    between calls.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if recent_limit < 0:
            raise ValueError("recent_limit must be non-negative")
        self.store = store
        self.page_size = page_size
        self.recent_limit = recent_limit

    def list(self, collection: str, limit: int | None = None) -> list[ContentMeta]:
        """Return metadata for every document, most recent first, truncated to ``limit``."""
        _check_limit(limit)
        raw_documents = []
        for raw in scan_collection(self.store, collection, skip_unreadable=True):
            if not derive_identifier(raw.filename):
                logger.warning("Skipping entry %r in '%s': it has no identifier.", raw.filename, collection)
                continue
            raw_documents.append(raw)
        _ensure_unique(collection, (raw.filename for raw in raw_documents))

        records = [
            normalize_metadata(raw.filename, split_front_matter(raw.text)[0])
            for raw in raw_documents
        ]
        ordered = sort_by_date(records)
        if limit is not None:
            return ordered[:limit]
        return ordered

    def get(self, collection: str, identifier: str) -> ContentDocument | None:
        """Return the document whose derived identifier is ``identifier``, or ``None``."""
        names = [name for name in self.store.list_entries(collection) if derive_identifier(name)]
        _ensure_unique(collection, names)
        for name in names:
            if derive_identifier(name) == identifier:
                text = self.store.read_entry(collection, name)
                return parse_document(name, text)
        logger.debug("No document '%s' in collection '%s'.", identifier, collection)
        return None

    def identifiers(self, collection: str) -> list[str]:
        """Return every slug in listing order."""
        return [meta.slug for meta in self.list(collection)]

    def recent(self, collection: str, limit: int | None = None) -> list[ContentMeta]:
        return self.list(collection, limit=self.recent_limit if limit is None else limit)

    def search(self, collection: str, query: str) -> list[ContentMeta]:
        """Filter the listing to documents whose title contains ``query``, ignoring case."""
        listing = self.list(collection)
        needle = query.strip().lower()
        if not needle:
            return listing
        return [meta for meta in listing if meta.title and needle in meta.title.lower()]

    def page(self, collection: str, number: int, page_size: int | None = None) -> ListingPage:
        """Return the 1-based ``number``-th page of the listing."""
        if number < 1:
            raise ValueError("page number must be at least 1")
        size = self.page_size if page_size is None else page_size
        if size <= 0:
            raise ValueError("page_size must be positive")

        listing = self.list(collection)
        start = (number - 1) * size
        return ListingPage(
            collection=collection,
            number=number,
            page_size=size,
            total_items=len(listing),
            items=listing[start : start + size],
        )


def sort_by_date(records: Iterable[ContentMeta]) -> list[ContentMeta]:
    """Sort most recent first; undated records sink to the end in input order."""
    return sorted(records, key=_date_key, reverse=True)


def _date_key(meta: ContentMeta) -> datetime:
    return meta.published_date or _OLDEST


def _check_limit(limit: int | None) -> None:
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")


def _ensure_unique(collection: str, filenames: Iterable[str]) -> None:
    counts = Counter(derive_identifier(name) for name in filenames)
    duplicates = sorted(slug for slug, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicateIdentifierError(collection, duplicates)
