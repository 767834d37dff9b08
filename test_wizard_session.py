import pytest

from conftest import CONTEXT_ANSWER, TOPIC_ANSWER, TWO_QUESTIONS, FakeAI
from llm.llm_client import LLMServiceError
from schemas.ai import RemoteValidation
from utils.conversation_engine import ConversationEngine, EntryKind, Mode
from utils.wizard_session import WizardSession


def make_session(fake_ai: FakeAI, on_complete=None) -> WizardSession:
    engine = ConversationEngine("reflection", schedule=TWO_QUESTIONS, choose=lambda options: options[0])
    return WizardSession(engine, validator=fake_ai.validate, summarizer=fake_ai.summarize, on_complete=on_complete)


async def test_full_conversation_reaches_confirmation(fake_ai):
    session = make_session(fake_ai)
    await session.start()

    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    assert session.state.answers == {"topic": TOPIC_ANSWER, "context": CONTEXT_ANSWER}
    assert session.state.mode == Mode.CONFIRMING
    assert not session.engine.busy
    confirmation = session.engine.transcript[-1]
    assert confirmation.kind == EntryKind.CONFIRMATION
    assert "Here is your reflection" in confirmation.text
    assert fake_ai.validated == [
        ("What topic did you learn about?", TOPIC_ANSWER),
        ("Where and how did you learn this?", CONTEXT_ANSWER),
    ]


async def test_local_rejection_skips_remote_validation(fake_ai):
    session = make_session(fake_ai)
    await session.start()

    await session.submit("idk")

    assert fake_ai.validated == []
    assert session.state.answers == {}


async def test_validator_outage_fails_open(fake_ai):
    fake_ai.validator_error = ConnectionError("connection reset")
    session = make_session(fake_ai)
    await session.start()

    await session.submit(TOPIC_ANSWER)

    assert session.state.answers == {"topic": TOPIC_ANSWER}
    assert session.state.position == 1


async def test_remote_rejection_needs_a_new_attempt(fake_ai):
    fake_ai.validations = [RemoteValidation(is_valid=False, feedback="Which topic exactly?")]
    session = make_session(fake_ai)
    await session.start()

    await session.submit("I learned a lot of things")
    assert session.state.answers == {}
    assert session.engine.transcript[-1].text == "Which topic exactly?"

    await session.submit(TOPIC_ANSWER)
    assert session.state.answers == {"topic": TOPIC_ANSWER}


async def test_summarizer_outage_uses_fallback(fake_ai):
    fake_ai.summarizer_error = LLMServiceError("AI service error", status_code=500)
    session = make_session(fake_ai)
    await session.start()

    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    text = session.engine.transcript[-1].text
    assert "• topic:" in text
    assert "• context:" in text


async def test_finalize_calls_on_complete_once_with_answers(fake_ai):
    received = []

    async def on_complete(answers):
        received.append(answers)
        return "generation-1"

    session = make_session(fake_ai, on_complete=on_complete)
    await session.start()
    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    assert await session.finalize() == "generation-1"
    assert received == [{"topic": TOPIC_ANSWER, "context": CONTEXT_ANSWER}]
    assert session.state.mode == Mode.COMPLETE


async def test_failed_finalize_is_reported_and_retryable(fake_ai):
    attempts = []

    async def on_complete(answers):
        attempts.append(answers)
        if len(attempts) == 1:
            raise LLMServiceError("Rate limit exceeded. Please try again later.", status_code=429)
        return "generation-2"

    session = make_session(fake_ai, on_complete=on_complete)
    await session.start()
    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    with pytest.raises(LLMServiceError):
        await session.finalize()
    assert session.state.mode == Mode.CONFIRMING
    assert "Rate limit exceeded" in session.engine.transcript[-1].text

    assert await session.finalize() == "generation-2"
    assert len(attempts) == 2


async def test_edit_flow_resummarizes(fake_ai):
    session = make_session(fake_ai)
    await session.start()
    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    await session.edit("context")
    await session.submit("also a study group on weekends")

    assert session.state.answers["context"] == f"{CONTEXT_ANSWER}. also a study group on weekends"
    assert session.state.mode == Mode.CONFIRMING
    confirmations = [e for e in session.engine.transcript if e.kind == EntryKind.CONFIRMATION]
    assert len(confirmations) == 1
    assert "also a study group on weekends" in confirmations[0].text


async def test_curly_apostrophe_keep_reply_leaves_answer_unchanged(fake_ai):
    session = make_session(fake_ai)
    await session.start()
    await session.submit(TOPIC_ANSWER)
    await session.submit(CONTEXT_ANSWER)

    fake_ai.validator_error = ConnectionError("validator down")
    await session.edit("topic")
    await session.submit("That’s fine")

    assert session.state.answers["topic"] == TOPIC_ANSWER
    assert session.state.mode == Mode.CONFIRMING
