"""Split raw source text into front matter and body, and normalize the metadata."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Mapping

import yaml

from .models import ContentDocument, ContentMeta

logger = logging.getLogger(__name__)

DELIMITER = "---"


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Return ``(fields, body)`` for ``text``.

    Absent or malformed front matter is not an error: the result is then an
    empty mapping and the complete original text as body.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    front_lines: list[str] = []
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            body = "".join(lines[idx + 1 :])
            data = _load_block("".join(front_lines))
            if data is None:
                return {}, text
            return data, body
        front_lines.append(line)

    logger.warning("Closing front matter delimiter '%s' missing; treating text as body.", DELIMITER)
    return {}, text


def _load_block(raw: str) -> dict[str, Any] | None:
    # BaseLoader keeps every scalar as written: `No`, `0755` and dates stay strings.
    try:
        data = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        logger.warning("Unable to parse front matter: %s", exc)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Front matter should define a mapping; got %s.", type(data).__name__)
        return None
    return data


def derive_identifier(filename: str) -> str:
    """Strip the final extension from ``filename`` (``hello.mdx`` -> ``hello``)."""
    name = PurePosixPath(filename).name
    suffix = PurePosixPath(name).suffix
    return name[: -len(suffix)] if suffix else name


def normalize_metadata(filename: str, fields: Mapping[str, Any]) -> ContentMeta:
    """Merge the filename-derived slug with parsed fields into a metadata record."""
    data = {key: value for key, value in fields.items() if key != "slug"}
    return ContentMeta(slug=derive_identifier(filename), **data)


def parse_document(filename: str, text: str) -> ContentDocument:
    """Parse a raw document into metadata plus body."""
    fields, body = split_front_matter(text)
    return ContentDocument(meta=normalize_metadata(filename, fields), body=body)
