from __future__ import annotations

import pytest

from folio.components import (
    ComponentRegistry,
    ComponentRenderError,
    CounterState,
    ExpandableState,
    Severity,
    default_registry,
)
from folio.components.alert import render_alert, render_callout
from folio.components.counter import render_counter
from folio.components.expandable import content_id, render_expandable


def test_default_registry_contents() -> None:
    registry = default_registry()

    assert registry.names() == ["Alert", "Callout", "Counter", "ExpandableSection", "Quiz"]
    assert "Quiz" in registry
    assert "quiz" not in registry
    assert registry.get("Missing") is None


def test_register_rejects_lowercase_names() -> None:
    registry = ComponentRegistry()

    with pytest.raises(ValueError):
        registry.register("alert", render_alert)


def test_merged_registry_leaves_original_untouched() -> None:
    base = default_registry()
    override = base.merged({"Alert": lambda attributes, children: "custom"})

    assert override.get("Alert") is not base.get("Alert")
    assert base.get("Alert") is render_alert
    assert len(override) == len(base)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, Severity.INFO),
        ("success", Severity.SUCCESS),
        ("WARNING", Severity.WARNING),
        ("error", Severity.ERROR),
        ("catastrophe", Severity.INFO),
    ],
)
def test_severity_parsing(raw: str | None, expected: Severity) -> None:
    assert Severity.parse(raw) is expected


def test_alert_defaults_to_info() -> None:
    html = render_alert({}, "<p>Heads up</p>")

    assert 'role="alert"' in html
    assert 'data-severity="info"' in html
    assert "bg-blue-100" in html
    assert "<p>Heads up</p>" in html


def test_callout_uses_note_role() -> None:
    html = render_callout({"type": "error"}, "Oops")

    assert 'role="note"' in html
    assert 'data-component="Callout"' in html
    assert "bg-red-100" in html


def test_counter_state_transitions() -> None:
    state = CounterState()

    assert state.increment().increment().decrement().count == 1
    assert state.decrement().count == -1
    assert state.count == 0


def test_counter_renders_initial_value() -> None:
    assert "Current vote: 0" in render_counter({}, "")
    assert "Current vote: 5" in render_counter({"initial": 5}, "")
    with pytest.raises(ComponentRenderError):
        render_counter({"initial": "many"}, "")


def test_expandable_state_toggles() -> None:
    state = ExpandableState()

    assert state.toggle().expanded is True
    assert state.toggle().toggle().expanded is False


def test_content_id_collapses_whitespace() -> None:
    assert content_id("My  Section\tTitle") == "content-my-section-title"


def test_expandable_collapsed_by_default() -> None:
    html = render_expandable({"title": "More <info>"}, "<p>Body</p>")

    assert 'aria-expanded="false"' in html
    assert " hidden>" in html
    assert "More &lt;info&gt;" in html
    assert "<p>Body</p>" in html


@pytest.mark.parametrize("flag", [True, "true", ""])
def test_expandable_default_expanded(flag: object) -> None:
    html = render_expandable({"title": "FAQ", "defaultExpanded": flag}, "Body")

    assert 'aria-expanded="true"' in html
    assert " hidden" not in html


def test_expandable_rejects_bad_flag_and_missing_title() -> None:
    with pytest.raises(ComponentRenderError):
        render_expandable({"title": "FAQ", "defaultExpanded": "sometimes"}, "")
    with pytest.raises(ComponentRenderError):
        render_expandable({}, "")
