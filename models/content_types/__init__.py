from models.question_schema import QuestionSchedule
from .bio import BIO_QUESTIONS
from .project import PROJECT_QUESTIONS
from .reflection import REFLECTION_QUESTIONS

# Reserved key whose answer yields the user's first name.
NAME_KEY = "name"

ALL_SCHEDULES: dict[str, QuestionSchedule] = {
    "bio": BIO_QUESTIONS,
    "project": PROJECT_QUESTIONS,
    "reflection": REFLECTION_QUESTIONS,
}


def get_schedule(content_type: str) -> QuestionSchedule:
    """Returns the ordered questions for a content type, or an empty tuple if unknown."""
    return ALL_SCHEDULES.get(content_type, ())
