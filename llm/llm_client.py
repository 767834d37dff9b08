import logging
from typing import Optional

from google import genai
from google.genai import errors, types

from core.config import get_settings

logger = logging.getLogger("LLMClient")

_client: Optional[genai.Client] = None


class LLMServiceError(Exception):
    """Raised when the text-generation provider fails or returns nothing usable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def get_client() -> genai.Client:
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.gemini_api_key:
            raise LLMServiceError("GEMINI_API_KEY is not configured")
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_response(
    prompt: str,
    persona: str,
    json_output: bool = False,
    temperature: Optional[float] = None,
) -> str:
    """
    Sends one prompt to Gemini and returns the response text.

    Raises:
        LLMServiceError: on provider errors or an empty response
    """
    settings = get_settings()
    client = get_client()

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=[
                types.Content(
                    role="user",
                    parts=[
                        types.Part.from_text(text=prompt),
                    ],
                ),
            ],
            config=types.GenerateContentConfig(
                max_output_tokens=settings.gemini_max_output_tokens,
                temperature=settings.gemini_temperature if temperature is None else temperature,
                response_mime_type="application/json" if json_output else None,
                system_instruction=[
                    types.Part.from_text(text=persona),
                ],
            ),
        )
    except errors.APIError as e:
        logger.error(f"Gemini API error {e.code}: {e.message}")
        raise LLMServiceError(e.message or "AI service error", status_code=e.code) from e

    text = (response.text or "").strip()
    if not text:
        raise LLMServiceError("No content received from AI")
    return text
