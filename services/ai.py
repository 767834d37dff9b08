"""AI service layer.

Business logic for the three collaborator calls: answer validation, answer
summarization and content generation. Each call raises LLMServiceError on
failure; deciding whether to fail open or fall back is the caller's job.
"""
import json
import logging
import re
from typing import Dict, Optional

from pydantic import ValidationError

from llm.llm_client import LLMServiceError, generate_response
from llm.wizard_prompt import (
    content_prompt,
    refinement_prompt,
    summary_prompt,
    system_instruction,
    validation_prompt,
)
from schemas.ai import RemoteValidation

logger = logging.getLogger("AIService")

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
QUOTA_MESSAGE = "AI service quota exceeded. Please contact support."


def parse_json_object(response_text: str) -> dict:
    """Extracts the first {...} block from an LLM response, even if it is surrounded by other text."""
    json_match = re.search(r"\{.*\}", response_text, re.DOTALL)
    if not json_match:
        raise LLMServiceError(f"Could not find any JSON object in the LLM response: '{response_text}'")
    try:
        return json.loads(json_match.group(0))
    except json.JSONDecodeError as e:
        raise LLMServiceError(f"Malformed JSON in LLM response: {e}") from e


async def validate_answer(question: str, answer: str) -> RemoteValidation:
    response_text = await generate_response(
        prompt=validation_prompt(question, answer),
        persona=system_instruction("validator"),
        json_output=True,
    )
    logger.info(f"Raw validation response from LLM: {response_text}")

    try:
        return RemoteValidation.model_validate(parse_json_object(response_text))
    except ValidationError as e:
        raise LLMServiceError(f"Unexpected validation payload: {e}") from e


async def summarize_answers(form_data: Dict[str, str], content_type: str) -> str:
    return await generate_response(
        prompt=summary_prompt(form_data, content_type),
        persona=system_instruction("summarizer"),
        temperature=0.7,
    )


async def generate_content(
    content_type: str,
    tone: str,
    word_limit: int,
    input_data: Dict[str, str],
    refinement: Optional[str] = None,
) -> str:
    """
    Generates (or refines) the final document.

    With a refinement instruction, input_data is expected to carry the
    previous draft under "existingContent".

    Raises:
        ValueError: for an unsupported content type
        LLMServiceError: when the provider fails
    """
    if refinement:
        persona, prompt = refinement_prompt(refinement, tone, word_limit, input_data)
    else:
        built = content_prompt(content_type, tone, word_limit, input_data)
        if built is None:
            raise ValueError("Invalid content type")
        persona, prompt = built

    logger.info(f"Generating {content_type} content ({tone}, ~{word_limit} words, refine={bool(refinement)})")
    try:
        return await generate_response(prompt=prompt, persona=persona)
    except LLMServiceError as e:
        if e.status_code == 429:
            raise LLMServiceError(RATE_LIMIT_MESSAGE, status_code=429) from e
        if e.status_code == 402:
            raise LLMServiceError(QUOTA_MESSAGE, status_code=402) from e
        raise
