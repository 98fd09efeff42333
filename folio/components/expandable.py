"""Collapsible section toggled by its heading button."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .registry import ComponentRenderError, bool_attribute, str_attribute

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class ExpandableState:
    expanded: bool = False

    def toggle(self) -> "ExpandableState":
        return replace(self, expanded=not self.expanded)


def content_id(title: str) -> str:
    """DOM id linking the toggle button to the section body."""
    return f"content-{_WHITESPACE_RE.sub('-', title).lower()}"


def render_expandable_state(title: str, children: str, state: ExpandableState, css_class: str | None = None) -> str:
    target = html.escape(content_id(title))
    classes = "mb-4 rounded-lg border"
    if css_class:
        classes = f"{classes} {html.escape(css_class)}"
    expanded = "true" if state.expanded else "false"
    hidden = "" if state.expanded else " hidden"
    icon = "chevron-up" if state.expanded else "chevron-down"
    return (
        f'<div class="{classes}" data-component="ExpandableSection" data-expanded="{expanded}">'
        "<h3>"
        '<button type="button" class="flex w-full items-center justify-between p-4 text-left font-bold" '
        f'aria-expanded="{expanded}" aria-controls="{target}">'
        f"<span>{html.escape(title)}</span>"
        f'<span class="icon icon--{icon} h-5 w-5" aria-hidden="true"></span>'
        "</button>"
        "</h3>"
        f'<div id="{target}"{hidden}><div class="border-t p-4">{children}</div></div>'
        "</div>"
    )


def render_expandable(attributes: Mapping[str, Any], children: str) -> str:
    title = str_attribute(attributes, "title")
    if not title:
        raise ComponentRenderError("ExpandableSection requires a 'title' attribute.")
    state = ExpandableState(expanded=bool_attribute(attributes, "defaultExpanded", False))
    return render_expandable_state(title, children, state, str_attribute(attributes, "className"))
