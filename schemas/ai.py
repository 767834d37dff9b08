"""Pydantic models for the AI collaborator endpoints."""
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Tone = Literal["first-person", "third-person"]


class ValidateAnswerRequest(BaseModel):
    question: str
    answer: str


class RemoteValidation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")
    feedback: Optional[str] = None
    acknowledgment: Optional[str] = None


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: Dict[str, str] = Field(..., alias="formData")
    content_type: str = Field(..., alias="contentType")


class SummaryResponse(BaseModel):
    summary: str


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="contentType")
    tone: Tone = "first-person"
    word_limit: int = Field(500, alias="wordLimit", ge=100, le=1000)
    input_data: Dict[str, str] = Field(..., alias="inputData")
    refinement_prompt: Optional[str] = Field(None, alias="refinementPrompt")


class GenerateContentResponse(BaseModel):
    content: str
