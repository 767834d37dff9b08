from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Question(BaseModel):
    """One step of an interview schedule.

    ``prompt`` is what the chat wizard asks; ``label``, ``placeholder`` and
    ``multiline`` describe the same field in form mode.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    prompt: str
    label: str
    placeholder: str = ""
    multiline: bool = True


QuestionSchedule = Tuple[Question, ...]


class QuestionResponse(BaseModel):
    content_type: str = Field(..., alias="contentType")
    questions: list[Question]

    model_config = ConfigDict(populate_by_name=True)
