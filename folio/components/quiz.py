"""Multiple-choice quiz component and the state machine behind it.

A quiz moves through ``InProgress(index, answers)`` states and ends in a
terminal ``Completed(answers)`` state. States are immutable; the transition
methods on :class:`Quiz` return the next state, or the very same state object
when the action is not allowed (selecting twice, advancing before answering,
acting on a completed quiz).
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class InvalidQuizDefinition(ValueError):
    """Raised when a quiz is constructed from an unusable question list."""


class Question(BaseModel):
    """A single question with ordered options and the index of the correct one."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str = Field(description="Question text.")
    options: tuple[str, ...] = Field(description="Answer options in display order.")
    correct_answer: int = Field(alias="correctAnswer", description="Index of the correct option.")


@dataclass(frozen=True, slots=True)
class InProgress:
    index: int
    answers: tuple[int | None, ...]

    @property
    def current_answer(self) -> int | None:
        return self.answers[self.index]

    @property
    def answered(self) -> bool:
        return self.current_answer is not None


@dataclass(frozen=True, slots=True)
class Completed:
    answers: tuple[int | None, ...]


QuizState = Union[InProgress, Completed]


class Quiz:
    """Fixed question list plus pure transition functions over quiz states."""

    def __init__(self, questions: Iterable[Question | Mapping[str, Any]]) -> None:
        self.questions: tuple[Question, ...] = tuple(_coerce_questions(questions))
        if not self.questions:
            raise InvalidQuizDefinition("A quiz needs at least one question.")
        for number, question in enumerate(self.questions, start=1):
            if not question.options:
                raise InvalidQuizDefinition(f"Question {number} has no options.")
            if not 0 <= question.correct_answer < len(question.options):
                raise InvalidQuizDefinition(
                    f"Question {number} marks option {question.correct_answer} as correct "
                    f"but only has {len(question.options)} option(s)."
                )

    def __len__(self) -> int:
        return len(self.questions)

    def start(self) -> InProgress:
        return InProgress(index=0, answers=(None,) * len(self.questions))

    def select_option(self, state: QuizState, option: int) -> QuizState:
        """Record ``option`` for the current question unless it is already answered."""
        self._check_state(state)
        if isinstance(state, Completed) or state.answered:
            return state
        options = self.questions[state.index].options
        if not 0 <= option < len(options):
            raise ValueError(f"Option {option} is out of range for question {state.index + 1}.")
        answers = list(state.answers)
        answers[state.index] = option
        return InProgress(index=state.index, answers=tuple(answers))

    def advance(self, state: QuizState) -> QuizState:
        """Move past the current question once it has been answered."""
        self._check_state(state)
        if isinstance(state, Completed) or not state.answered:
            return state
        if state.index + 1 < len(self.questions):
            return InProgress(index=state.index + 1, answers=state.answers)
        return Completed(answers=state.answers)

    def score(self, state: QuizState) -> int:
        """Count correct answers among the questions answered so far."""
        self._check_state(state)
        return sum(
            1
            for question, answer in zip(self.questions, state.answers)
            if answer is not None and answer == question.correct_answer
        )

    def is_correct(self, state: InProgress) -> bool | None:
        """Whether the current answer is correct, or ``None`` while unanswered."""
        if not state.answered:
            return None
        return state.current_answer == self.questions[state.index].correct_answer

    def to_json(self) -> str:
        payload = [question.model_dump(by_alias=True, mode="json") for question in self.questions]
        return json.dumps(payload, ensure_ascii=False)

    def _check_state(self, state: QuizState) -> None:
        if len(state.answers) != len(self.questions):
            raise ValueError("State does not belong to this quiz.")


class QuizSession:
    """One learner's run through a quiz; owned by a single interactive session."""

    def __init__(self, quiz: Quiz) -> None:
        self.quiz = quiz
        self.state: QuizState = quiz.start()

    @property
    def completed(self) -> bool:
        return isinstance(self.state, Completed)

    def select_option(self, option: int) -> QuizState:
        self.state = self.quiz.select_option(self.state, option)
        return self.state

    def advance(self) -> QuizState:
        self.state = self.quiz.advance(self.state)
        return self.state

    def score(self) -> int:
        return self.quiz.score(self.state)


def _coerce_questions(questions: Iterable[Question | Mapping[str, Any]]) -> list[Question]:
    if isinstance(questions, (str, bytes)) or not isinstance(questions, Iterable):
        raise InvalidQuizDefinition("Quiz questions must be a list of question objects.")
    coerced: list[Question] = []
    for number, entry in enumerate(questions, start=1):
        if isinstance(entry, Question):
            coerced.append(entry)
            continue
        try:
            coerced.append(Question.model_validate(entry))
        except ValidationError as exc:
            raise InvalidQuizDefinition(f"Question {number} is malformed: {exc}") from exc
    return coerced


def render_quiz(quiz: Quiz, state: QuizState) -> str:
    """Render the card shown to the learner for ``state``."""
    if isinstance(state, Completed):
        return (
            '<div class="card quiz quiz--completed">'
            '<div class="card-header"><h3 class="card-title">Quiz Completed!</h3></div>'
            '<div class="card-content">'
            f"<p>Your score: {quiz.score(state)} out of {len(quiz)}</p>"
            "</div></div>"
        )

    question = quiz.questions[state.index]
    selected = state.current_answer
    buttons: list[str] = []
    for index, option in enumerate(question.options):
        variant = "outline"
        if selected == index:
            variant = "success" if index == question.correct_answer else "destructive"
        disabled = " disabled" if state.answered else ""
        label = html.escape(f"Option {index + 1}: {option}", quote=True)
        buttons.append(
            f'<button type="button" class="button button--{variant} w-full justify-start" '
            f'data-option="{index}" aria-label="{label}"{disabled}>{html.escape(option)}</button>'
        )

    feedback = ""
    if state.answered:
        message = "Correct!" if quiz.is_correct(state) else "Incorrect. Try again!"
        action = "Finish Quiz" if state.index == len(quiz) - 1 else "Next Question"
        feedback = (
            '<div class="mt-4">'
            f"<p>{message}</p>"
            f'<button type="button" class="button mt-2" data-action="advance">{action}</button>'
            "</div>"
        )

    return (
        f'<div class="card quiz" data-question="{state.index}">'
        '<div class="card-header"><h3 class="card-title">Quiz</h3></div>'
        '<div class="card-content">'
        f'<p class="mb-4">{html.escape(question.question)}</p>'
        f'<div class="space-y-2">{"".join(buttons)}</div>'
        f"{feedback}"
        "</div></div>"
    )


def render_quiz_component(attributes: Mapping[str, Any], children: str) -> str:
    questions = attributes.get("questions")
    if questions is None:
        raise InvalidQuizDefinition("Quiz requires a 'questions' attribute.")
    quiz = Quiz(questions)
    payload = html.escape(quiz.to_json(), quote=True)
    return f'<div data-component="Quiz" data-quiz="{payload}">{render_quiz(quiz, quiz.start())}</div>'
