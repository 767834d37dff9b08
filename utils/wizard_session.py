"""
Wizard Session
Async driver that runs a ConversationEngine against its collaborators.
"""

import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from schemas.ai import RemoteValidation
from utils.conversation_engine import (
    AnswerSubmitted,
    ConversationEngine,
    EditRequested,
    Effect,
    Event,
    FinalizeRequested,
    HandOff,
    HandOffFailed,
    RemoteValidationFailed,
    RemoteValidationReceived,
    RequestRemoteValidation,
    RequestSummary,
    Start,
    SummaryFailed,
    SummaryReceived,
)

logger = logging.getLogger("WizardSession")

Validator = Callable[[str, str], Awaitable[RemoteValidation]]
Summarizer = Callable[[Dict[str, str], str], Awaitable[str]]
CompletionHandler = Callable[[Dict[str, str]], Awaitable[Any]]


class WizardSession:
    """
    One chat-mode wizard run.

    Remote validation and summarization never fail a turn: validator errors
    are reported to the engine as RemoteValidationFailed (fail-open) and
    summarizer errors as SummaryFailed (deterministic fallback). Errors from
    on_complete are terminal for that finalize attempt and are re-raised after
    the engine has been told about them.
    """

    def __init__(
        self,
        engine: ConversationEngine,
        validator: Validator,
        summarizer: Summarizer,
        on_complete: Optional[CompletionHandler] = None,
        tone: str = "first-person",
        word_limit: int = 500,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.engine = engine
        self.validator = validator
        self.summarizer = summarizer
        self.on_complete = on_complete
        self.tone = tone
        self.word_limit = word_limit
        self.result: Any = None

    @property
    def state(self):
        return self.engine.state

    async def start(self) -> None:
        await self._run(Start())

    async def submit(self, text: str) -> None:
        await self._run(AnswerSubmitted(text=text))

    async def edit(self, key: str) -> None:
        await self._run(EditRequested(key=key))

    async def finalize(self) -> Any:
        await self._run(FinalizeRequested())
        return self.result

    async def _run(self, event: Event) -> None:
        pending: List[Effect] = list(self.engine.dispatch(event).effects)
        while pending:
            effect = pending.pop(0)
            follow_up = await self._perform(effect)
            if follow_up is not None:
                pending.extend(self.engine.dispatch(follow_up).effects)

    async def _perform(self, effect: Effect) -> Optional[Event]:
        if isinstance(effect, RequestRemoteValidation):
            try:
                result = await self.validator(effect.question, effect.answer)
            except Exception as e:
                logger.error(f"[{self.session_id}] Remote validation failed: {e}")
                return RemoteValidationFailed(error=str(e))
            return RemoteValidationReceived(result=result)

        if isinstance(effect, RequestSummary):
            try:
                summary = await self.summarizer(effect.answers, effect.content_type)
            except Exception as e:
                logger.error(f"[{self.session_id}] Summary generation failed: {e}")
                return SummaryFailed(error=str(e))
            return SummaryReceived(summary=summary)

        if isinstance(effect, HandOff):
            if self.on_complete is None:
                self.result = effect.answers
                return None
            try:
                self.result = await self.on_complete(effect.answers)
            except Exception as e:
                self.engine.dispatch(HandOffFailed(error=str(e)))
                raise
            logger.info(f"[{self.session_id}] Wizard completed for {self.state.content_type}")
            return None

        raise TypeError(f"Unknown effect: {type(effect).__name__}")
