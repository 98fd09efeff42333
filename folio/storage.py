"""Read-only access to collections of content documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Protocol

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".mdx", ".md")


class CollectionNotFound(LookupError):
    """Raised when a collection has no storage location."""

    def __init__(self, collection: str) -> None:
        super().__init__(f"Collection '{collection}' not found.")
        self.collection = collection


class DocumentReadFailure(OSError):
    """Raised when a single document in a collection cannot be read."""

    def __init__(self, collection: str, name: str, reason: object) -> None:
        super().__init__(f"Unable to read '{name}' in collection '{collection}': {reason}")
        self.collection = collection
        self.name = name


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Filename and decoded text of a single stored document."""

    filename: str
    text: str


class DocumentStore(Protocol):
    """Storage backend consulted by the content repository."""

    def list_entries(self, collection: str) -> list[str]:
        """Return entry names in a stable order; raise ``CollectionNotFound`` if missing."""
        ...

    def read_entry(self, collection: str, name: str) -> str:
        """Return the text of one entry; raise ``DocumentReadFailure`` on I/O errors."""
        ...


class FilesystemStore:
    """Collections are directories below ``root``; entries are files with known suffixes."""

    def __init__(self, root: str | Path, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> None:
        self.root = Path(root)
        self.suffixes = frozenset(suffix.lower() for suffix in suffixes)

    def collection_path(self, collection: str) -> Path:
        return self.root / collection

    def list_entries(self, collection: str) -> list[str]:
        directory = self.collection_path(collection)
        if not directory.is_dir():
            raise CollectionNotFound(collection)
        return sorted(
            path.name
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in self.suffixes
        )

    def read_entry(self, collection: str, name: str) -> str:
        directory = self.collection_path(collection)
        if not directory.is_dir():
            raise CollectionNotFound(collection)
        path = directory / name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadFailure(collection, name, exc) from exc


class MemoryStore:
    """In-memory store mapping collection names to ``{filename: text}``."""

    def __init__(self, collections: Mapping[str, Mapping[str, str]]) -> None:
        self._collections = {name: dict(entries) for name, entries in collections.items()}

    def list_entries(self, collection: str) -> list[str]:
        try:
            return list(self._collections[collection])
        except KeyError:
            raise CollectionNotFound(collection) from None

    def read_entry(self, collection: str, name: str) -> str:
        try:
            entries = self._collections[collection]
        except KeyError:
            raise CollectionNotFound(collection) from None
        try:
            return entries[name]
        except KeyError:
            raise DocumentReadFailure(collection, name, "no such entry") from None


def scan_collection(
    store: DocumentStore,
    collection: str,
    *,
    skip_unreadable: bool = False,
) -> list[RawDocument]:
    """Read every entry of ``collection``.

    With ``skip_unreadable`` a document that fails to read is logged and left
    out instead of failing the whole scan.
    """
    documents: list[RawDocument] = []
    for name in store.list_entries(collection):
        try:
            text = store.read_entry(collection, name)
        except DocumentReadFailure as exc:
            if not skip_unreadable:
                raise
            logger.warning("Skipping unreadable document: %s", exc)
            continue
        documents.append(RawDocument(filename=name, text=text))
    return documents
