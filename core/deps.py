"""Reusable FastAPI dependency functions."""
from functools import lru_cache

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from core.config import get_settings
from db.connection import get_db
from services import ai as ai_service
from utils.cache import SessionStore
from utils.generation_store import GenerationStore
from utils.wizard_session import Summarizer, Validator


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore(ttl_seconds=get_settings().session_ttl_seconds)


def get_generation_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> GenerationStore:
    return GenerationStore(db)


def get_validator() -> Validator:
    return ai_service.validate_answer


def get_summarizer() -> Summarizer:
    return ai_service.summarize_answers


def get_content_generator():
    """Returns the coroutine function used to produce final content."""
    return ai_service.generate_content
