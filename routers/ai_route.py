import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from core.deps import get_content_generator, get_summarizer, get_validator
from llm.llm_client import LLMServiceError
from models.content_types import get_schedule
from models.question_schema import QuestionResponse
from schemas.ai import (
    GenerateContentRequest,
    GenerateContentResponse,
    RemoteValidation,
    SummarizeRequest,
    SummaryResponse,
    ValidateAnswerRequest,
)

router = APIRouter()
logger = logging.getLogger("AIRouter")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/content-types/{content_type}/questions", response_model=QuestionResponse, tags=["AI"])
async def list_questions(content_type: str):
    """Returns the question schedule, which is also the field list for form mode."""
    questions = get_schedule(content_type)
    if not questions:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown content type: {content_type}")
    return QuestionResponse(content_type=content_type, questions=list(questions))


@router.post("/validate-answer", response_model=RemoteValidation, response_model_by_alias=True, tags=["AI"])
async def validate_answer_endpoint(request: ValidateAnswerRequest, validator=Depends(get_validator)):
    try:
        return await validator(request.question, request.answer)
    except LLMServiceError as e:
        logger.error(f"Error in validate-answer: {e}")
        return error_response(500, str(e))


@router.post("/summarize-info", response_model=SummaryResponse, tags=["AI"])
async def summarize_info_endpoint(request: SummarizeRequest, summarizer=Depends(get_summarizer)):
    try:
        summary = await summarizer(request.form_data, request.content_type)
    except LLMServiceError as e:
        logger.error(f"Error in summarize-info: {e}")
        return error_response(500, str(e))
    return SummaryResponse(summary=summary)


@router.post("/generate-content", response_model=GenerateContentResponse, tags=["AI"])
async def generate_content_endpoint(request: GenerateContentRequest, generate_content=Depends(get_content_generator)):
    try:
        content = await generate_content(
            request.content_type,
            request.tone,
            request.word_limit,
            request.input_data,
            refinement=request.refinement_prompt,
        )
    except ValueError as e:
        return error_response(400, str(e))
    except LLMServiceError as e:
        logger.error(f"Generate content error: {e}")
        return error_response(e.status_code if e.status_code in (402, 429) else 500, str(e))
    return GenerateContentResponse(content=content)
