import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from core.deps import get_content_generator, get_generation_store
from llm.llm_client import LLMServiceError
from models.content_types import get_schedule
from models.generation_schema import FormGenerateRequest, GenerationRecord, RefineRequest
from utils.generation_store import GenerationStore

router = APIRouter()
logger = logging.getLogger("GenerationRouter")


def llm_error_to_http(e: LLMServiceError) -> HTTPException:
    if e.status_code in (402, 429):
        return HTTPException(status_code=e.status_code, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


@router.post("/generate", response_model=GenerationRecord, tags=["Generation"])
async def generate_from_form(
    request: FormGenerateRequest,
    generations: GenerationStore = Depends(get_generation_store),
    generate_content=Depends(get_content_generator),
):
    """Form mode: validates that every field is filled, generates the content and saves it."""
    questions = get_schedule(request.content_type)
    if not questions:
        raise HTTPException(status_code=400, detail=f"Unsupported content type: {request.content_type}")

    for question in questions:
        if not (request.input_data.get(question.key) or "").strip():
            raise HTTPException(status_code=422, detail=f"Please fill in the {question.label} field")

    # Only schedule fields are forwarded.
    input_data = {q.key: request.input_data[q.key].strip() for q in questions}

    try:
        content = await generate_content(request.content_type, request.tone, request.word_limit, input_data)
    except LLMServiceError as e:
        logger.error(f"Generation error: {e}")
        raise llm_error_to_http(e)

    return await generations.insert(
        content_type=request.content_type,
        tone=request.tone,
        word_limit=request.word_limit,
        input_data=input_data,
        generated_content=content,
    )


@router.get("/generations", response_model=List[GenerationRecord], tags=["Generation"])
async def list_generations(limit: int = Query(50, ge=1, le=200), generations: GenerationStore = Depends(get_generation_store)):
    return await generations.list(limit=limit)


@router.get("/generations/{generation_id}", response_model=GenerationRecord, tags=["Generation"])
async def get_generation(generation_id: str, generations: GenerationStore = Depends(get_generation_store)):
    record = await generations.get(generation_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Generation not found")
    return record


@router.post("/generations/{generation_id}/refine", response_model=GenerationRecord, tags=["Generation"])
async def refine_generation(
    generation_id: str,
    request: RefineRequest,
    generations: GenerationStore = Depends(get_generation_store),
    generate_content=Depends(get_content_generator),
):
    """Rewrites a saved generation following the user's instructions."""
    record = await generations.get(generation_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Generation not found")

    try:
        content = await generate_content(
            record.content_type,
            record.tone,
            record.word_limit,
            {"existingContent": record.generated_content},
            refinement=request.refinement_prompt,
        )
    except LLMServiceError as e:
        logger.error(f"Refinement error: {e}")
        raise llm_error_to_http(e)

    updated = await generations.update_content(generation_id, content)
    if updated is None:
        raise HTTPException(status_code=404, detail="Generation not found")
    return updated


@router.delete("/generations/{generation_id}", tags=["Generation"])
async def delete_generation(generation_id: str, generations: GenerationStore = Depends(get_generation_store)):
    if not await generations.delete(generation_id):
        raise HTTPException(status_code=404, detail="Generation not found")
    return {"message": "Generation deleted"}
