"""
Answer Validator
Cheap, synchronous checks that run before an answer is sent for remote validation.
"""

from typing import Optional

from pydantic import BaseModel

from utils.intent_detector import normalize_reply

DEFAULT_MIN_LENGTH = 10

TOO_SHORT_FEEDBACK = "That seems a bit short. Could you provide more details?"
PLACEHOLDER_FEEDBACK = "I need real information to help you. Please share actual details."

PLACEHOLDER_ANSWERS = frozenset(
    {"test", "example", "sample", "n/a", "na", "none", "idk", "i don't know"}
)


class LocalValidation(BaseModel):
    accepted: bool
    rejection_reason: Optional[str] = None


def is_placeholder(text: str) -> bool:
    return normalize_reply(text).strip().lower() in PLACEHOLDER_ANSWERS


def validate_locally(answer_text: str, min_length: int = DEFAULT_MIN_LENGTH) -> LocalValidation:
    """
    Rejects obviously insufficient answers. The first failing rule wins.

    Args:
        answer_text: Raw text typed by the user
        min_length: Minimum number of characters after trimming

    Returns:
        LocalValidation with the rejection message to show the user, if any
    """
    trimmed = (answer_text or "").strip()

    if len(trimmed) < min_length:
        return LocalValidation(accepted=False, rejection_reason=TOO_SHORT_FEEDBACK)

    if is_placeholder(trimmed):
        return LocalValidation(accepted=False, rejection_reason=PLACEHOLDER_FEEDBACK)

    return LocalValidation(accepted=True)
