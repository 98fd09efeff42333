"""Vote counter demo component."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from .registry import int_attribute


@dataclass(frozen=True, slots=True)
class CounterState:
    count: int = 0

    def increment(self) -> "CounterState":
        return replace(self, count=self.count + 1)

    def decrement(self) -> "CounterState":
        return replace(self, count=self.count - 1)


def render_counter_state(state: CounterState) -> str:
    return (
        f'<div class="flex items-center gap-3" data-component="Counter" data-count="{state.count}">'
        '<button type="button" data-action="decrement" aria-label="Decrement">&minus;</button>'
        f"<p>Current vote: {state.count}</p>"
        '<button type="button" data-action="increment" aria-label="Increment">+</button>'
        "</div>"
    )


def render_counter(attributes: Mapping[str, Any], children: str) -> str:
    return render_counter_state(CounterState(count=int_attribute(attributes, "initial", 0)))
