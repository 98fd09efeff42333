"""Embeddable components available to document bodies."""

from .alert import Severity, render_alert, render_callout
from .counter import CounterState, render_counter
from .expandable import ExpandableState, render_expandable
from .quiz import (
    Completed,
    InProgress,
    InvalidQuizDefinition,
    Question,
    Quiz,
    QuizSession,
    QuizState,
    render_quiz,
    render_quiz_component,
)
from .registry import ComponentRegistry, ComponentRenderError, ComponentRenderer


def default_registry() -> ComponentRegistry:
    """Build the registry of components shipped with Folio."""
    return ComponentRegistry(
        {
            "Counter": render_counter,
            "Alert": render_alert,
            "Callout": render_callout,
            "ExpandableSection": render_expandable,
            "Quiz": render_quiz_component,
        }
    )


__all__ = [
    "Completed",
    "ComponentRegistry",
    "ComponentRenderError",
    "ComponentRenderer",
    "CounterState",
    "ExpandableState",
    "InProgress",
    "InvalidQuizDefinition",
    "Question",
    "Quiz",
    "QuizSession",
    "QuizState",
    "Severity",
    "default_registry",
    "render_quiz",
]
