import pytest

from utils.answer_validator import (
    PLACEHOLDER_FEEDBACK,
    TOO_SHORT_FEEDBACK,
    validate_locally,
)


@pytest.mark.parametrize("text", ["", "   ", "short", "  123456789  "])
def test_rejects_answers_below_minimum_length(text):
    result = validate_locally(text)
    assert not result.accepted
    assert result.rejection_reason == TOO_SHORT_FEEDBACK


@pytest.mark.parametrize("text", ["test", "EXAMPLE", "Sample", "n/a", "NA", "none", "idk", "I Don't Know", "I don\u2019t know", "i don\u02bct know"])
def test_rejects_placeholder_answers(text):
    result = validate_locally(text, min_length=1)
    assert not result.accepted
    assert result.rejection_reason == PLACEHOLDER_FEEDBACK


def test_length_rule_wins_over_placeholder_rule():
    assert validate_locally("idk").rejection_reason == TOO_SHORT_FEEDBACK


def test_placeholder_must_be_the_whole_answer():
    assert validate_locally("I don't know much about it yet, but I used Django").accepted


def test_accepts_real_answer():
    result = validate_locally("Python, SQL and data visualization")
    assert result.accepted
    assert result.rejection_reason is None


def test_custom_minimum_length():
    assert validate_locally("Go and Rust", min_length=3).accepted
    assert not validate_locally("Go", min_length=3).accepted
