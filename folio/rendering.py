"""Render document bodies: Markdown, highlighted code, and embedded components.

Component markup follows the MDX convention: a tag whose name starts with an
upper-case letter (``<Alert type="info">...</Alert>``, ``<Counter />``) is
looked up in the :class:`ComponentRegistry`; lower-case tags are ordinary HTML
and are left to the Markdown renderer. Attribute values may be quoted strings,
``{expressions}`` (read as YAML flow values, so JSON and JS-style object
literals both work) or bare flags meaning ``True``. Markup inside fenced code
blocks and inline code spans is never interpreted.
"""

from __future__ import annotations

import html
import logging
import re
import secrets
import textwrap
from dataclasses import dataclass, field
from typing import Any, Union

import yaml

from .components import ComponentRegistry
from .content import ContentDocument
from .markdown import render_markdown

logger = logging.getLogger(__name__)

TAG_NAME_RE = re.compile(r"<([A-Z][A-Za-z0-9_.]*)")
CLOSE_TAG_RE = re.compile(r"</([A-Z][A-Za-z0-9_.]*)\s*>")
ATTR_NAME_RE = re.compile(r"[A-Za-z_:][\w:.-]*")
UNQUOTED_VALUE_RE = re.compile(r"[^\s\"'=<>`/]+")
FENCE_RE = re.compile(r"[ \t]*(`{3,}|~{3,})([^\n]*)")
BACKTICK_RUN_RE = re.compile(r"`+")
PLACEHOLDER = "<!--folio-component-{nonce}-{index}-->"


class ComponentMarkupError(ValueError):
    """Raised in strict mode when component markup is malformed."""


class UnknownComponentError(LookupError):
    """Raised in strict mode when a body uses a component the registry lacks."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown component <{name}>.")
        self.name = name


@dataclass(frozen=True, slots=True)
class ComponentNode:
    name: str
    attributes: dict[str, Any]
    children: str
    source: str


@dataclass(frozen=True, slots=True)
class LiteralNode:
    """Tag-like text that is shown verbatim instead of being interpreted."""

    text: str


Node = Union[str, ComponentNode, LiteralNode]


@dataclass(frozen=True, slots=True)
class RenderedBody:
    html: str
    components: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class _OpenTag:
    name: str
    attributes: dict[str, Any]
    end: int
    self_closing: bool


class MarkupParser:
    """Split a body into Markdown text and component invocations."""

    def __init__(self, text: str, *, strict: bool = False) -> None:
        self.text = text
        self.strict = strict

    def parse(self) -> list[Node]:
        nodes, _, _ = self._parse_nodes(0, None)
        return nodes

    def _parse_nodes(self, pos: int, closing: str | None) -> tuple[list[Node], int | None, int]:
        """Parse until ``</closing>``; return nodes, start of the closing tag, and end position."""
        text = self.text
        length = len(text)
        nodes: list[Node] = []
        chunk_start = i = pos

        while i < length:
            if i == 0 or text[i - 1] == "\n":
                fence_end = _skip_fence(text, i)
                if fence_end is not None:
                    i = fence_end
                    continue

            char = text[i]
            if char == "`":
                i = _skip_code_span(text, i)
                continue
            if char != "<":
                i += 1
                continue

            close = CLOSE_TAG_RE.match(text, i)
            if close is not None:
                _flush(nodes, text, chunk_start, i)
                if close.group(1) == closing:
                    return nodes, i, close.end()
                if self.strict:
                    raise ComponentMarkupError(f"Unexpected closing tag {close.group()}")
                nodes.append(LiteralNode(close.group()))
                i = chunk_start = close.end()
                continue

            tag = self._parse_open_tag(i)
            if tag is None:
                i += 1
                continue

            _flush(nodes, text, chunk_start, i)
            if tag.self_closing:
                nodes.append(ComponentNode(tag.name, tag.attributes, "", text[i : tag.end]))
                i = chunk_start = tag.end
                continue

            _, content_end, after = self._parse_nodes(tag.end, tag.name)
            if content_end is None:
                if self.strict:
                    raise ComponentMarkupError(f"<{tag.name}> is never closed.")
                logger.warning("Component <%s> is never closed; rendering it as text.", tag.name)
                nodes.append(LiteralNode(text[i : tag.end]))
                i = chunk_start = tag.end
                continue

            nodes.append(ComponentNode(tag.name, tag.attributes, text[tag.end : content_end], text[i:after]))
            i = chunk_start = after

        _flush(nodes, text, chunk_start, length)
        return nodes, None, length

    def _parse_open_tag(self, pos: int) -> _OpenTag | None:
        text = self.text
        match = TAG_NAME_RE.match(text, pos)
        if match is None:
            return None
        name = match.group(1)
        attributes: dict[str, Any] = {}
        cursor = match.end()

        while True:
            start = cursor
            cursor = _skip_whitespace(text, cursor)
            if cursor >= len(text):
                return None
            if text.startswith("/>", cursor):
                return _OpenTag(name, attributes, cursor + 2, True)
            if text[cursor] == ">":
                return _OpenTag(name, attributes, cursor + 1, False)
            if cursor == start:
                return None

            attr = ATTR_NAME_RE.match(text, cursor)
            if attr is None:
                return None
            key = attr.group()
            cursor = attr.end()
            after_name = _skip_whitespace(text, cursor)
            if after_name < len(text) and text[after_name] == "=":
                parsed = self._parse_value(_skip_whitespace(text, after_name + 1))
                if parsed is None:
                    return None
                attributes[key], cursor = parsed
            else:
                attributes[key] = True

    def _parse_value(self, pos: int) -> tuple[Any, int] | None:
        text = self.text
        if pos >= len(text):
            return None
        opener = text[pos]
        if opener in "\"'":
            end = text.find(opener, pos + 1)
            if end == -1:
                return None
            return text[pos + 1 : end], end + 1
        if opener == "{":
            end = _match_brace(text, pos)
            if end is None:
                return None
            return self._evaluate(text[pos + 1 : end]), end + 1
        unquoted = UNQUOTED_VALUE_RE.match(text, pos)
        if unquoted is None:
            return None
        return unquoted.group(), unquoted.end()

    def _evaluate(self, expression: str) -> Any:
        if not expression.strip():
            return None
        try:
            return yaml.safe_load(expression)
        except yaml.YAMLError as exc:
            if self.strict:
                raise ComponentMarkupError(f"Cannot read attribute expression {{{expression}}}: {exc}") from exc
            logger.warning("Keeping unreadable attribute expression as text: %s", exc)
            return expression


class RenderPipeline:
    """Render bodies against an explicit component registry.

    In lenient mode (the default) unknown components render their children in
    a neutral ``<div class="mdx-unknown">`` wrapper and malformed tags are
    shown as text; strict mode raises instead.
    """

    def __init__(self, registry: ComponentRegistry, *, strict: bool = False) -> None:
        self.registry = registry
        self.strict = strict

    def render(self, body: str) -> RenderedBody:
        used: list[str] = []
        rendered = self._render_source(body, used)
        return RenderedBody(html=rendered, components=tuple(used))

    def render_document(self, document: ContentDocument) -> RenderedBody:
        return self.render(document.body)

    def _render_source(self, source: str, used: list[str]) -> str:
        nodes = MarkupParser(source, strict=self.strict).parse()
        # A fresh nonce per pass keeps author-written comments from matching.
        nonce = secrets.token_hex(8)
        parts: list[str] = []
        fragments: list[str] = []
        for node in nodes:
            if isinstance(node, str):
                parts.append(node)
                continue
            if isinstance(node, LiteralNode):
                parts.append(html.escape(node.text))
                continue
            fragments.append(self._render_component(node, used))
            parts.append(PLACEHOLDER.format(nonce=nonce, index=len(fragments) - 1))

        rendered = render_markdown("".join(parts))
        pattern = re.compile(rf"<!--folio-component-{nonce}-(\d+)-->")
        return pattern.sub(lambda match: fragments[int(match.group(1))], rendered)

    def _render_component(self, node: ComponentNode, used: list[str]) -> str:
        renderer = self.registry.get(node.name)
        if renderer is None and self.strict:
            raise UnknownComponentError(node.name)
        if renderer is not None:
            used.append(node.name)

        children = textwrap.dedent(node.children).strip()
        children_html = self._render_source(children, used) if children else ""

        if renderer is None:
            logger.warning("Unknown component <%s>; rendering its children only.", node.name)
            return f'<div class="mdx-unknown" data-component="{html.escape(node.name)}">{children_html}</div>'
        return renderer(dict(node.attributes), children_html)


def _flush(nodes: list[Node], text: str, start: int, end: int) -> None:
    if end > start:
        nodes.append(text[start:end])


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _skip_fence(text: str, pos: int) -> int | None:
    """Return the position after the fenced block opening at ``pos``, if there is one."""
    match = FENCE_RE.match(text, pos)
    if match is None:
        return None
    marker, info = match.group(1), match.group(2)
    if marker[0] == "`" and "`" in info:
        return None
    closing = re.compile(rf"^[ \t]*{re.escape(marker[0])}{{{len(marker)},}}[ \t]*$", re.MULTILINE)
    found = closing.search(text, match.end())
    if found is None:
        return len(text)
    return found.end()


def _skip_code_span(text: str, pos: int) -> int:
    run = BACKTICK_RUN_RE.match(text, pos)
    if run is None:
        return pos + 1
    ticks = run.group()
    closing = re.compile(rf"(?<!`){ticks}(?!`)")
    found = closing.search(text, run.end())
    return found.end() if found else run.end()


def _match_brace(text: str, pos: int) -> int | None:
    """Index of the ``}`` matching the ``{`` at ``pos``, skipping quoted strings."""
    depth = 0
    quote: str | None = None
    i = pos
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"'`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None
