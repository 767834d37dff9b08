from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.generation_schema import GenerationRecord, Tone
from models.question_schema import Question
from utils.conversation_engine import Mode, TranscriptEntry


class StartWizardRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="contentType")
    tone: Optional[Tone] = None
    word_limit: Optional[int] = Field(None, alias="wordLimit", ge=100, le=1000)


class AnswerRequest(BaseModel):
    message: str


class EditRequest(BaseModel):
    key: str


class WizardStateResponse(BaseModel):
    session_id: str
    content_type: str
    tone: str
    word_limit: int
    mode: Mode
    position: int
    total_questions: int
    current_question: Optional[Question] = None
    answers: Dict[str, str]
    transcript: List[TranscriptEntry]
    busy: bool
    edit_options: List[str]
    can_finalize: bool


class FinalizeResponse(BaseModel):
    session: WizardStateResponse
    generation: GenerationRecord
