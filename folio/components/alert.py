"""Severity-styled alert and callout boxes."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from .registry import str_attribute

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Visual variant of an alert."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: str | None) -> "Severity":
        """Resolve ``value``; missing or unknown severities fall back to info."""
        if value is None:
            return cls.INFO
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.warning("Unknown alert type '%s'; using 'info'.", value)
            return cls.INFO


SEVERITY_CLASSES: dict[Severity, str] = {
    Severity.INFO: "bg-blue-100 border-blue-500 text-blue-700",
    Severity.SUCCESS: "bg-green-100 border-green-500 text-green-700",
    Severity.WARNING: "bg-yellow-100 border-yellow-500 text-yellow-700",
    Severity.ERROR: "bg-red-100 border-red-500 text-red-700",
}

SEVERITY_ICONS: dict[Severity, str] = {
    Severity.INFO: "info-circled",
    Severity.SUCCESS: "check-circled",
    Severity.WARNING: "exclamation-triangle",
    Severity.ERROR: "cross-circled",
}


def _render_box(severity: Severity, children: str, *, component: str, role: str) -> str:
    icon = SEVERITY_ICONS[severity]
    return (
        f'<div class="mb-4 border-l-4 p-4 {SEVERITY_CLASSES[severity]}" role="{role}" '
        f'data-component="{component}" data-severity="{severity.value}">'
        '<div class="flex items-center">'
        f'<span class="icon icon--{icon} mr-3 h-5 w-5" aria-hidden="true"></span>'
        f"<div>{children}</div>"
        "</div></div>"
    )


def render_alert(attributes: Mapping[str, Any], children: str) -> str:
    severity = Severity.parse(str_attribute(attributes, "type"))
    return _render_box(severity, children, component="Alert", role="alert")


def render_callout(attributes: Mapping[str, Any], children: str) -> str:
    severity = Severity.parse(str_attribute(attributes, "type"))
    return _render_box(severity, children, component="Callout", role="note")
