import logging
import re
from enum import Enum
from typing import Tuple

logger = logging.getLogger("IntentDetector")


class EditIntent(str, Enum):
    KEEP_UNCHANGED = "keep_unchanged"
    APPEND = "append"
    REPLACE = "replace"


KEEP_PATTERN = re.compile(
    r"\b(?:same|keep|no change|that'?s fine|ok|okay)\b",
    re.IGNORECASE,
)

ADDITIVE_PATTERN = re.compile(
    r"\b(?:also|and|additionally|plus|as well|too|furthermore|moreover)\b",
    re.IGNORECASE,
)

REPLACEMENT_PATTERN = re.compile(
    r"\b(?:actually|change to|replace with|instead|rather than)\b|\bnot\b.*\bbut\b",
    re.IGNORECASE | re.DOTALL,
)

APPEND_SEPARATOR = ". "

# Curly quotes sent by phone and macOS keyboards.
APOSTROPHES = str.maketrans({"\u2019": "'", "\u2018": "'", "\u02bc": "'"})


def normalize_reply(text: str) -> str:
    """Maps typographic apostrophes to ASCII so phrase matching sees one spelling."""
    return (text or "").translate(APOSTROPHES)


def wants_to_keep(text: str) -> bool:
    return bool(KEEP_PATTERN.search(normalize_reply(text)))


def classify_edit_intent(text: str) -> EditIntent:
    """
    Decides what an answer given while editing a field means for the prior value.

    - keep_unchanged: the user says the current value is fine
    - append: additive language without any replacement language
    - replace: everything else; replacement language wins over additive language
    """
    if wants_to_keep(text):
        return EditIntent.KEEP_UNCHANGED

    text = normalize_reply(text)
    has_additive = bool(ADDITIVE_PATTERN.search(text))
    has_replacement = bool(REPLACEMENT_PATTERN.search(text))

    if has_additive and not has_replacement:
        return EditIntent.APPEND
    return EditIntent.REPLACE


def compose_edited_answer(prior_value: str, new_text: str) -> Tuple[EditIntent, str]:
    """Returns the detected intent and the value that should be validated and stored."""
    new_text = (new_text or "").strip()
    intent = classify_edit_intent(new_text)

    if intent is EditIntent.KEEP_UNCHANGED:
        value = prior_value
    elif intent is EditIntent.APPEND:
        value = f"{prior_value}{APPEND_SEPARATOR}{new_text}"
    else:
        value = new_text

    logger.debug(f"Edit intent '{intent.value}' for reply: '{new_text}'")
    return intent, value
