import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from core.deps import (
    get_content_generator,
    get_generation_store,
    get_session_store,
    get_summarizer,
    get_validator,
)
from models.generation_schema import GenerationRecord
from models.question_schema import Question
from schemas.ai import RemoteValidation
from utils.cache import SessionStore

TWO_QUESTIONS = (
    Question(key="topic", prompt="What topic did you learn about?", label="Learning Topic"),
    Question(key="context", prompt="Where and how did you learn this?", label="Learning Context"),
)

TOPIC_ANSWER = "Distributed systems fundamentals and CAP theorem"
CONTEXT_ANSWER = "Self-studied over three weekends using papers and a course"


class FakeGenerationStore:
    def __init__(self):
        self.records: Dict[str, GenerationRecord] = {}

    async def insert(self, content_type, tone, word_limit, input_data, generated_content) -> GenerationRecord:
        record = GenerationRecord(
            id=uuid.uuid4().hex,
            content_type=content_type,
            tone=tone,
            word_limit=word_limit,
            input_data=dict(input_data),
            generated_content=generated_content,
            created_at=datetime.now(timezone.utc),
        )
        self.records[record.id] = record
        return record

    async def list(self, limit: int = 50) -> List[GenerationRecord]:
        return sorted(self.records.values(), key=lambda r: r.created_at, reverse=True)[:limit]

    async def get(self, generation_id: str) -> Optional[GenerationRecord]:
        return self.records.get(generation_id)

    async def update_content(self, generation_id: str, generated_content: str) -> Optional[GenerationRecord]:
        record = self.records.get(generation_id)
        if record is None:
            return None
        updated = record.model_copy(
            update={"generated_content": generated_content, "updated_at": datetime.now(timezone.utc)}
        )
        self.records[generation_id] = updated
        return updated

    async def delete(self, generation_id: str) -> bool:
        return self.records.pop(generation_id, None) is not None


class FakeAI:
    """Scriptable stand-in for the Gemini-backed collaborators."""

    def __init__(self):
        self.validations: List[RemoteValidation] = []
        self.validator_error: Optional[Exception] = None
        self.summarizer_error: Optional[Exception] = None
        self.generator_error: Optional[Exception] = None
        self.validated: List[tuple] = []
        self.generated: List[dict] = []

    async def validate(self, question: str, answer: str) -> RemoteValidation:
        self.validated.append((question, answer))
        if self.validator_error:
            raise self.validator_error
        if self.validations:
            return self.validations.pop(0)
        return RemoteValidation(is_valid=True)

    async def summarize(self, form_data: Dict[str, str], content_type: str) -> str:
        if self.summarizer_error:
            raise self.summarizer_error
        return f"Here is your {content_type}: " + "; ".join(form_data.values())

    async def generate(self, content_type, tone, word_limit, input_data, refinement=None) -> str:
        self.generated.append(
            {"content_type": content_type, "tone": tone, "word_limit": word_limit,
             "input_data": dict(input_data), "refinement": refinement}
        )
        if self.generator_error:
            raise self.generator_error
        if refinement:
            return f"Refined ({refinement}): {input_data['existingContent']}"
        return f"A {content_type} written in {tone}."


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def generation_store():
    return FakeGenerationStore()


@pytest.fixture
def client(fake_ai, generation_store):
    from main import app

    session_store = SessionStore(ttl_seconds=600)
    app.dependency_overrides[get_validator] = lambda: fake_ai.validate
    app.dependency_overrides[get_summarizer] = lambda: fake_ai.summarize
    app.dependency_overrides[get_content_generator] = lambda: fake_ai.generate
    app.dependency_overrides[get_generation_store] = lambda: generation_store
    app.dependency_overrides[get_session_store] = lambda: session_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
