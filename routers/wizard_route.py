import logging

from fastapi import APIRouter, Depends, HTTPException, status

from core.config import get_settings
from core.deps import (
    get_content_generator,
    get_generation_store,
    get_session_store,
    get_summarizer,
    get_validator,
)
from llm.llm_client import LLMServiceError
from models.content_types import get_schedule
from models.wizard_schema import (
    AnswerRequest,
    EditRequest,
    FinalizeResponse,
    StartWizardRequest,
    WizardStateResponse,
)
from utils.cache import SessionStore
from utils.conversation_engine import (
    ConversationEngine,
    InvalidTransitionError,
    TurnInProgressError,
    UnknownFieldError,
    WizardError,
)
from utils.generation_store import GenerationStore
from utils.wizard_session import WizardSession

router = APIRouter()
logger = logging.getLogger("WizardRouter")


def to_response(session: WizardSession) -> WizardStateResponse:
    engine = session.engine
    state = engine.state
    return WizardStateResponse(
        session_id=session.session_id,
        content_type=state.content_type,
        tone=session.tone,
        word_limit=session.word_limit,
        mode=state.mode,
        position=state.position,
        total_questions=len(state.schedule),
        current_question=state.current_question,
        answers=state.ordered_answers(),
        transcript=list(engine.transcript),
        busy=engine.busy,
        edit_options=engine.edit_options,
        can_finalize=engine.can_finalize,
    )


def wizard_error_to_http(e: WizardError) -> HTTPException:
    if isinstance(e, TurnInProgressError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, UnknownFieldError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, InvalidTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def load_session(session_id: str, store: SessionStore) -> WizardSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Wizard session not found or expired")
    return session


@router.post("/wizard/sessions", response_model=WizardStateResponse, tags=["Wizard"])
async def start_wizard(
    request: StartWizardRequest,
    store: SessionStore = Depends(get_session_store),
    validator=Depends(get_validator),
    summarizer=Depends(get_summarizer),
):
    """Starts a chat-mode wizard and asks the first question."""
    settings = get_settings()
    if not get_schedule(request.content_type):
        raise HTTPException(status_code=400, detail=f"Unsupported content type: {request.content_type}")

    engine = ConversationEngine(request.content_type, min_answer_length=settings.min_answer_length)
    session = WizardSession(
        engine,
        validator=validator,
        summarizer=summarizer,
        tone=request.tone or settings.default_tone,
        word_limit=request.word_limit or settings.default_word_limit,
    )
    await session.start()
    store.set(session)

    logger.info(f"Started {request.content_type} wizard session {session.session_id}")
    return to_response(session)


@router.get("/wizard/sessions/{session_id}", response_model=WizardStateResponse, tags=["Wizard"])
async def get_wizard(session_id: str, store: SessionStore = Depends(get_session_store)):
    return to_response(load_session(session_id, store))


@router.post("/wizard/sessions/{session_id}/answers", response_model=WizardStateResponse, tags=["Wizard"])
async def submit_answer(
    session_id: str,
    request: AnswerRequest,
    store: SessionStore = Depends(get_session_store),
):
    session = load_session(session_id, store)
    try:
        await session.submit(request.message)
    except WizardError as e:
        raise wizard_error_to_http(e)
    return to_response(session)


@router.post("/wizard/sessions/{session_id}/edit", response_model=WizardStateResponse, tags=["Wizard"])
async def edit_answer(
    session_id: str,
    request: EditRequest,
    store: SessionStore = Depends(get_session_store),
):
    session = load_session(session_id, store)
    try:
        await session.edit(request.key)
    except WizardError as e:
        raise wizard_error_to_http(e)
    return to_response(session)


@router.post("/wizard/sessions/{session_id}/finalize", response_model=FinalizeResponse, tags=["Wizard"])
async def finalize_wizard(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    generations: GenerationStore = Depends(get_generation_store),
    generate_content=Depends(get_content_generator),
):
    """
    Hands the completed answers to content generation and saves the result.
    On failure the session returns to the confirmation step so the user can retry.
    """
    session = load_session(session_id, store)

    async def on_complete(answers):
        content = await generate_content(
            session.state.content_type, session.tone, session.word_limit, answers
        )
        return await generations.insert(
            content_type=session.state.content_type,
            tone=session.tone,
            word_limit=session.word_limit,
            input_data=answers,
            generated_content=content,
        )

    session.on_complete = on_complete
    try:
        record = await session.finalize()
    except WizardError as e:
        raise wizard_error_to_http(e)
    except LLMServiceError as e:
        raise HTTPException(status_code=e.status_code or 502, detail=str(e))
    except Exception as e:
        logger.error(f"Error finalizing wizard session {session_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate content")

    store.delete(session_id)
    return FinalizeResponse(session=to_response(session), generation=record)
