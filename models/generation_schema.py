from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Tone = Literal["first-person", "third-person"]


class FormGenerateRequest(BaseModel):
    """Form mode: every schedule field submitted at once."""
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="contentType")
    tone: Tone = "first-person"
    word_limit: int = Field(500, alias="wordLimit", ge=100, le=1000)
    input_data: Dict[str, str] = Field(..., alias="inputData")


class RefineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refinement_prompt: str = Field(..., alias="refinementPrompt", min_length=1)


class GenerationRecord(BaseModel):
    id: str
    content_type: str
    tone: str
    word_limit: int
    input_data: Dict[str, str]
    generated_content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
