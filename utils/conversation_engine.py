"""
Conversation Engine
Turn-based state machine behind the chat wizard.

The engine never performs I/O. Every user action or collaborator result is an
event passed to ``dispatch``; the returned Transition carries the updated state
plus the effects (remote validation, summarization, hand-off) the caller must
perform and report back as new events.
"""

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from models.content_types import NAME_KEY, get_schedule
from models.question_schema import Question, QuestionSchedule
from schemas.ai import RemoteValidation
from utils.answer_validator import DEFAULT_MIN_LENGTH, validate_locally
from utils.intent_detector import EditIntent, compose_edited_answer

logger = logging.getLogger("ConversationEngine")

GREETING = "Hi! I'll help you create your content. Let's start with some questions."
RETRY_FEEDBACK = "Could you tell me a bit more? I need a more specific answer to this question."
KEEP_ACKNOWLEDGMENT = "No problem, I'll keep your answer as it is."
CONFIRMATION_FOOTER = "Looks good? You can edit any answer, or generate your content."

ACKNOWLEDGMENTS = ("Thanks for that!", "Perfect!", "Great!", "Got it!")
PERSONAL_ACKNOWLEDGMENTS = ("Thanks, {name}!", "Perfect, {name}!", "Great, {name}!", "Got it, {name}!")


class WizardError(Exception):
    """Base class for events the engine refuses to process."""


class TurnInProgressError(WizardError):
    pass


class InvalidTransitionError(WizardError):
    pass


class UnknownFieldError(WizardError):
    pass


class Mode(str, Enum):
    INTERVIEWING = "interviewing"
    VALIDATING = "validating"
    CONFIRMING = "confirming"
    EDITING_FIELD = "editing_field"
    COMPLETE = "complete"


class Speaker(str, Enum):
    SYSTEM = "system"
    USER = "user"


class EntryKind(str, Enum):
    MESSAGE = "message"
    CONFIRMATION = "confirmation"


class TranscriptEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str
    kind: EntryKind = EntryKind.MESSAGE


class ConversationState(BaseModel):
    content_type: str
    schedule: QuestionSchedule
    position: int = 0
    mode: Mode = Mode.INTERVIEWING
    answers: Dict[str, str] = Field(default_factory=dict)
    transcript: List[TranscriptEntry] = Field(default_factory=list)
    pending_first_name: Optional[str] = None
    editing_key: Optional[str] = None
    pending_answer: Optional[str] = None
    summary_pending: bool = False
    last_summary: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.mode == Mode.VALIDATING or self.summary_pending

    @property
    def current_question(self) -> Optional[Question]:
        if self.position < len(self.schedule):
            return self.schedule[self.position]
        return None

    @property
    def keys(self) -> List[str]:
        return [question.key for question in self.schedule]

    @property
    def is_answer_set_complete(self) -> bool:
        return set(self.answers) == set(self.keys)

    def ordered_answers(self) -> Dict[str, str]:
        return {key: self.answers[key] for key in self.keys if key in self.answers}


# Events
class Start(BaseModel):
    pass


class AnswerSubmitted(BaseModel):
    text: str


class RemoteValidationReceived(BaseModel):
    result: RemoteValidation


class RemoteValidationFailed(BaseModel):
    error: str


class SummaryReceived(BaseModel):
    summary: str


class SummaryFailed(BaseModel):
    error: str


class EditRequested(BaseModel):
    key: str


class FinalizeRequested(BaseModel):
    pass


class HandOffFailed(BaseModel):
    error: str


Event = Union[
    Start, AnswerSubmitted, RemoteValidationReceived, RemoteValidationFailed,
    SummaryReceived, SummaryFailed, EditRequested, FinalizeRequested, HandOffFailed,
]


# Effects
class RequestRemoteValidation(BaseModel):
    question: str
    answer: str


class RequestSummary(BaseModel):
    answers: Dict[str, str]
    content_type: str


class HandOff(BaseModel):
    answers: Dict[str, str]


Effect = Union[RequestRemoteValidation, RequestSummary, HandOff]


class Transition(NamedTuple):
    state: ConversationState
    effects: List[Effect]


def build_fallback_summary(answers: Dict[str, str]) -> str:
    """Deterministic summary used whenever the remote summarizer is unavailable."""
    return "\n".join(f"• {key}: {value}" for key, value in answers.items())


def extract_first_name(answer: str) -> Optional[str]:
    tokens = answer.split()
    return tokens[0] if tokens else None


class ConversationEngine:
    """
    Owns one wizard session's ConversationState.

    Args:
        content_type: Key of the question schedule to run
        schedule: Explicit questions, overriding the registered schedule
        min_answer_length: Threshold for the local validator
        choose: Picks an acknowledgment from a sequence of variants
    """

    def __init__(
        self,
        content_type: str,
        schedule: Optional[QuestionSchedule] = None,
        min_answer_length: int = DEFAULT_MIN_LENGTH,
        choose: Callable[[Sequence[str]], str] = random.choice,
    ):
        schedule = tuple(schedule) if schedule is not None else get_schedule(content_type)
        if not schedule:
            raise ValueError(f"No questions configured for content type '{content_type}'")

        self.state = ConversationState(content_type=content_type, schedule=schedule)
        self.min_answer_length = min_answer_length
        self._choose = choose
        self._handlers = {
            Start: self._on_start,
            AnswerSubmitted: self._on_answer,
            RemoteValidationReceived: self._on_remote_validation,
            RemoteValidationFailed: self._on_remote_validation_failed,
            SummaryReceived: self._on_summary,
            SummaryFailed: self._on_summary_failed,
            EditRequested: self._on_edit,
            FinalizeRequested: self._on_finalize,
            HandOffFailed: self._on_hand_off_failed,
        }

    @property
    def transcript(self) -> tuple:
        return tuple(self.state.transcript)

    @property
    def busy(self) -> bool:
        return self.state.busy

    @property
    def edit_options(self) -> List[str]:
        if self.state.mode == Mode.CONFIRMING and not self.state.summary_pending:
            return self.state.keys
        return []

    @property
    def can_finalize(self) -> bool:
        return bool(self.edit_options) and self.state.is_answer_set_complete

    def dispatch(self, event: Event) -> Transition:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise InvalidTransitionError(f"Unsupported event: {type(event).__name__}")
        effects = handler(event)
        return Transition(state=self.state, effects=effects)

    # Transcript helpers

    def _say(self, text: str, kind: EntryKind = EntryKind.MESSAGE) -> None:
        self.state.transcript.append(TranscriptEntry(speaker=Speaker.SYSTEM, text=text, kind=kind))

    def _ask_current(self) -> None:
        self._say(self.state.current_question.prompt)

    def _acknowledgment(self) -> str:
        name = self.state.pending_first_name
        if name:
            return self._choose(PERSONAL_ACKNOWLEDGMENTS).format(name=name)
        return self._choose(ACKNOWLEDGMENTS)

    def _show_confirmation(self, summary: str) -> None:
        self.state.summary_pending = False
        self.state.last_summary = summary
        self.state.transcript = [
            entry for entry in self.state.transcript if entry.kind != EntryKind.CONFIRMATION
        ]
        name = self.state.pending_first_name
        header = f"Perfect, {name}! Let me confirm what we have:" if name else "Perfect! Let me confirm what we have:"
        self._say(f"{header}\n\n{summary}\n\n{CONFIRMATION_FOOTER}", kind=EntryKind.CONFIRMATION)

    def _enter_confirming(self, reuse_summary: bool = False) -> List[Effect]:
        self.state.mode = Mode.CONFIRMING
        self.state.editing_key = None
        self.state.position = len(self.state.schedule)

        if reuse_summary and self.state.last_summary:
            self._show_confirmation(self.state.last_summary)
            return []

        self.state.summary_pending = True
        return [RequestSummary(answers=self.state.ordered_answers(), content_type=self.state.content_type)]

    # Handlers

    def _on_start(self, event: Start) -> List[Effect]:
        if self.state.transcript:
            raise InvalidTransitionError("The conversation has already started")
        self._say(GREETING)
        self._ask_current()
        return []

    def _on_answer(self, event: AnswerSubmitted) -> List[Effect]:
        state = self.state
        if state.busy:
            raise TurnInProgressError("Please wait for the current turn to finish")
        if state.mode not in (Mode.INTERVIEWING, Mode.EDITING_FIELD):
            raise InvalidTransitionError("No question is waiting for an answer")

        text = (event.text or "").strip()
        if not text:
            return []

        state.transcript.append(TranscriptEntry(speaker=Speaker.USER, text=text))

        if state.mode == Mode.EDITING_FIELD:
            prior = state.answers[state.editing_key]
            intent, value = compose_edited_answer(prior, text)
            logger.info(f"Editing '{state.editing_key}' with intent '{intent.value}'")

            if intent is EditIntent.KEEP_UNCHANGED:
                self._say(KEEP_ACKNOWLEDGMENT)
                return self._enter_confirming(reuse_summary=True)
            # An append extends an answer that already passed local validation.
            if intent is EditIntent.REPLACE and not self._passes_local_validation(value):
                return []
        else:
            value = text
            if not self._passes_local_validation(value):
                return []

        state.pending_answer = value
        state.mode = Mode.VALIDATING
        return [RequestRemoteValidation(question=state.current_question.prompt, answer=value)]

    def _passes_local_validation(self, value: str) -> bool:
        validation = validate_locally(value, self.min_answer_length)
        if not validation.accepted:
            logger.info(f"Answer rejected locally for '{self.state.current_question.key}'")
            self._say(validation.rejection_reason)
        return validation.accepted

    def _require_validating(self) -> None:
        if self.state.mode != Mode.VALIDATING:
            raise InvalidTransitionError("No answer is awaiting validation")

    def _on_remote_validation(self, event: RemoteValidationReceived) -> List[Effect]:
        self._require_validating()
        result = event.result
        if result.is_valid:
            return self._commit(result.acknowledgment)

        logger.info(f"Answer rejected by remote validator for '{self.state.current_question.key}'")
        self.state.pending_answer = None
        self.state.mode = Mode.EDITING_FIELD if self.state.editing_key else Mode.INTERVIEWING
        self._say(result.feedback or RETRY_FEEDBACK)
        return []

    def _on_remote_validation_failed(self, event: RemoteValidationFailed) -> List[Effect]:
        self._require_validating()
        logger.warning(f"Remote validation unavailable, accepting answer: {event.error}")
        return self._commit(None)

    def _commit(self, acknowledgment: Optional[str]) -> List[Effect]:
        state = self.state
        key = state.current_question.key
        state.answers[key] = state.pending_answer
        state.pending_answer = None

        if key == NAME_KEY:
            state.pending_first_name = extract_first_name(state.answers[key])

        self._say(acknowledgment or self._acknowledgment())

        if state.editing_key:
            return self._enter_confirming()

        if state.position + 1 < len(state.schedule):
            state.position += 1
            state.mode = Mode.INTERVIEWING
            self._ask_current()
            return []

        return self._enter_confirming()

    def _require_summary_pending(self) -> None:
        if self.state.mode != Mode.CONFIRMING or not self.state.summary_pending:
            raise InvalidTransitionError("No summary was requested")

    def _on_summary(self, event: SummaryReceived) -> List[Effect]:
        self._require_summary_pending()
        summary = event.summary.strip()
        if not summary:
            summary = build_fallback_summary(self.state.ordered_answers())
        self._show_confirmation(summary)
        return []

    def _on_summary_failed(self, event: SummaryFailed) -> List[Effect]:
        self._require_summary_pending()
        logger.warning(f"Summary generation failed, using fallback: {event.error}")
        self._show_confirmation(build_fallback_summary(self.state.ordered_answers()))
        return []

    def _on_edit(self, event: EditRequested) -> List[Effect]:
        state = self.state
        if state.busy:
            raise TurnInProgressError("Please wait for the current turn to finish")
        if state.mode != Mode.CONFIRMING:
            raise InvalidTransitionError("Answers can only be edited from the confirmation step")
        if event.key not in state.keys:
            raise UnknownFieldError(f"Unknown field: {event.key}")

        state.editing_key = event.key
        state.position = state.keys.index(event.key)
        state.mode = Mode.EDITING_FIELD
        self._say(
            f"Sure, let's revisit this one. {state.current_question.prompt}\n\n"
            f"Your current answer: \"{state.answers[event.key]}\". "
            f"You can add to it, replace it, or say \"keep\" to leave it unchanged."
        )
        return []

    def _on_finalize(self, event: FinalizeRequested) -> List[Effect]:
        state = self.state
        if state.busy:
            raise TurnInProgressError("Please wait for the current turn to finish")
        if state.mode != Mode.CONFIRMING or not state.is_answer_set_complete:
            raise InvalidTransitionError("The answers are not ready to be finalized")

        state.mode = Mode.COMPLETE
        return [HandOff(answers=state.ordered_answers())]

    def _on_hand_off_failed(self, event: HandOffFailed) -> List[Effect]:
        if self.state.mode != Mode.COMPLETE:
            raise InvalidTransitionError("Nothing was handed off")
        logger.error(f"Content generation failed: {event.error}")
        self.state.mode = Mode.CONFIRMING
        self._say(f"Sorry, I couldn't generate your content: {event.error}. Please try again.")
        return []
