"""Shared Markdown rendering helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Sequence, cast

from markdown_it import MarkdownIt
from markdown_it.renderer import RendererHTML
from markdown_it.token import Token
from markdown_it.utils import OptionsDict
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .highlight import highlight


def _highlight_fence(code: str, language: str, _attrs: str) -> str:
    return highlight(code, language or None)


def _render_code_inline(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: Any,
) -> str:
    token = tokens[idx]
    return f"<code{self.renderAttrs(token)}>{highlight(token.content)}</code>"


def _render_code_block(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: Any,
) -> str:
    token = tokens[idx]
    return f"<pre><code>{highlight(token.content)}</code></pre>\n"


@lru_cache(maxsize=1)
def _renderer() -> MarkdownIt:
    """Configure and cache a CommonMark-compliant renderer with code highlighting."""
    md = MarkdownIt("commonmark", {"html": True, "highlight": _highlight_fence})
    md.enable("table").enable("strikethrough")
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin, label=True)
    md.add_render_rule("code_inline", _render_code_inline)
    md.add_render_rule("code_block", _render_code_block)
    return md


def render_markdown(text: str) -> str:
    """Render Markdown to HTML using the shared renderer."""
    if not text.strip():
        return ""
    return cast(str, _renderer().render(text))
