from __future__ import annotations

import json

import pytest

from folio.components import (
    Completed,
    InProgress,
    InvalidQuizDefinition,
    Question,
    Quiz,
    QuizSession,
    render_quiz,
)


def _quiz() -> Quiz:
    return Quiz(
        [
            Question(question="First?", options=("a", "b", "c", "d"), correct_answer=0),
            Question(question="Second?", options=("a", "b", "c", "d"), correct_answer=2),
        ]
    )


def test_two_question_scenario() -> None:
    quiz = _quiz()
    state = quiz.start()
    assert state == InProgress(index=0, answers=(None, None))

    state = quiz.select_option(state, 0)
    state = quiz.advance(state)
    assert state == InProgress(index=1, answers=(0, None))

    state = quiz.select_option(state, 3)
    state = quiz.advance(state)

    assert isinstance(state, Completed)
    assert quiz.score(state) == 1


def test_second_selection_is_ignored() -> None:
    quiz = _quiz()
    answered = quiz.select_option(quiz.start(), 1)

    again = quiz.select_option(answered, 0)

    assert again is answered
    assert again.answers == (1, None)


def test_advance_before_answering_is_ignored() -> None:
    quiz = _quiz()
    start = quiz.start()

    assert quiz.advance(start) is start


def test_completed_is_terminal() -> None:
    quiz = _quiz()
    state = quiz.start()
    for option in (0, 2):
        state = quiz.advance(quiz.select_option(state, option))
    assert isinstance(state, Completed)

    assert quiz.select_option(state, 1) is state
    assert quiz.advance(state) is state
    assert quiz.score(state) == 2


def test_score_is_incremental() -> None:
    quiz = _quiz()
    state = quiz.start()
    assert quiz.score(state) == 0

    state = quiz.select_option(state, 0)
    assert quiz.score(state) == 1


def test_out_of_range_option_is_an_error() -> None:
    quiz = _quiz()

    with pytest.raises(ValueError):
        quiz.select_option(quiz.start(), 4)
    with pytest.raises(ValueError):
        quiz.select_option(quiz.start(), -1)


def test_state_from_another_quiz_is_rejected() -> None:
    single = Quiz([{"question": "Only?", "options": ["yes"], "correctAnswer": 0}])

    with pytest.raises(ValueError):
        single.advance(_quiz().start())


@pytest.mark.parametrize(
    "questions",
    [
        [],
        [{"question": "No options?", "options": [], "correctAnswer": 0}],
        [{"question": "Too far?", "options": ["a", "b"], "correctAnswer": 2}],
        [{"question": "Negative?", "options": ["a", "b"], "correctAnswer": -1}],
        [{"question": "Missing index?", "options": ["a"]}],
        ["not a question"],
        "not a list",
    ],
)
def test_malformed_definitions_are_rejected(questions: object) -> None:
    with pytest.raises(InvalidQuizDefinition):
        Quiz(questions)  # type: ignore[arg-type]


def test_session_tracks_state() -> None:
    session = QuizSession(_quiz())

    session.advance()
    assert session.state == InProgress(index=0, answers=(None, None))

    session.select_option(0)
    session.select_option(1)
    session.advance()
    session.select_option(2)
    session.advance()

    assert session.completed
    assert session.score() == 2


def test_render_unanswered_question() -> None:
    quiz = _quiz()

    html = render_quiz(quiz, quiz.start())

    assert "First?" in html
    assert html.count("data-option=") == 4
    assert "disabled" not in html
    assert "Next Question" not in html


def test_render_feedback_after_answer() -> None:
    quiz = _quiz()

    correct = render_quiz(quiz, quiz.select_option(quiz.start(), 0))
    assert "Correct!" in correct
    assert "button--success" in correct
    assert "Next Question" in correct
    assert "disabled" in correct

    last = quiz.select_option(quiz.advance(quiz.select_option(quiz.start(), 0)), 1)
    wrong = render_quiz(quiz, last)
    assert "Incorrect. Try again!" in wrong
    assert "button--destructive" in wrong
    assert "Finish Quiz" in wrong


def test_render_completed_shows_score() -> None:
    quiz = _quiz()
    state = quiz.start()
    for option in (0, 3):
        state = quiz.advance(quiz.select_option(state, option))

    html = render_quiz(quiz, state)

    assert "Quiz Completed!" in html
    assert "Your score: 1 out of 2" in html


def test_quiz_json_uses_markup_keys() -> None:
    payload = json.loads(_quiz().to_json())

    assert payload[1] == {"question": "Second?", "options": ["a", "b", "c", "d"], "correctAnswer": 2}
