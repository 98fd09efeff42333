"""Name-to-renderer mapping consulted when expanding embedded components."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator, Mapping

ComponentRenderer = Callable[[Mapping[str, Any], str], str]

COMPONENT_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9_.]*$")


class ComponentRenderError(ValueError):
    """Raised when a component receives attributes it cannot render."""


class ComponentRegistry:
    """Registry of embeddable components keyed by their case-sensitive name."""

    def __init__(self, components: Mapping[str, ComponentRenderer] | None = None) -> None:
        self._components: dict[str, ComponentRenderer] = {}
        for name, renderer in (components or {}).items():
            self.register(name, renderer)

    def register(self, name: str, renderer: ComponentRenderer) -> None:
        if not COMPONENT_NAME_RE.match(name):
            raise ValueError(f"Component names must start with an upper-case letter: {name!r}")
        if not callable(renderer):
            raise TypeError(f"Renderer for component '{name}' must be callable.")
        self._components[name] = renderer

    def get(self, name: str) -> ComponentRenderer | None:
        return self._components.get(name)

    def names(self) -> list[str]:
        return sorted(self._components)

    def merged(self, overrides: Mapping[str, ComponentRenderer]) -> "ComponentRegistry":
        """Return a new registry with ``overrides`` layered on top of this one."""
        combined = dict(self._components)
        combined.update(overrides)
        return ComponentRegistry(combined)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._components)


def bool_attribute(attributes: Mapping[str, Any], name: str, default: bool = False) -> bool:
    """Read a boolean attribute written as ``flag``, ``flag={true}`` or ``flag="false"``."""
    value = attributes.get(name, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", ""}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    raise ComponentRenderError(f"Attribute '{name}' must be a boolean, got {value!r}")


def int_attribute(attributes: Mapping[str, Any], name: str, default: int = 0) -> int:
    value = attributes.get(name, default)
    if isinstance(value, bool):
        raise ComponentRenderError(f"Attribute '{name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ComponentRenderError(f"Attribute '{name}' must be an integer, got {value!r}") from None


def str_attribute(attributes: Mapping[str, Any], name: str) -> str | None:
    value = attributes.get(name)
    if value is None:
        return None
    return str(value)
