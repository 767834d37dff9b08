import pytest

from utils.intent_detector import EditIntent, classify_edit_intent, compose_edited_answer


@pytest.mark.parametrize("reply", ["same", "Keep it", "no change please", "That's fine", "That\u2019s fine", "that\u2018s fine", "ok", "Okay!"])
def test_keep_phrases(reply):
    assert classify_edit_intent(reply) is EditIntent.KEEP_UNCHANGED


@pytest.mark.parametrize(
    "reply",
    [
        "also Kubernetes",
        "I led the migration as well",
        "Additionally mentored two interns",
        "plus a Postgres upgrade",
        "Furthermore, I wrote the runbooks",
    ],
)
def test_additive_phrases_append(reply):
    assert classify_edit_intent(reply) is EditIntent.APPEND


@pytest.mark.parametrize(
    "reply",
    [
        "actually Z",
        "Change to backend engineering",
        "Use Go instead, and drop Java",
        "Rust rather than C++, and also Zig",
        "not Python but Elixir, plus Erlang",
        "Machine learning operations",
    ],
)
def test_replacement_or_plain_text_replaces(reply):
    assert classify_edit_intent(reply) is EditIntent.REPLACE


def test_keep_returns_prior_value_verbatim():
    assert compose_edited_answer("Built a CI pipeline.", "same") == (
        EditIntent.KEEP_UNCHANGED,
        "Built a CI pipeline.",
    )


def test_append_joins_with_separator():
    assert compose_edited_answer("X", "also Y") == (EditIntent.APPEND, "X. also Y")


def test_replace_discards_prior_value():
    assert compose_edited_answer("X", "  actually Z  ") == (EditIntent.REPLACE, "actually Z")
