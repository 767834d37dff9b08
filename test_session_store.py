from types import SimpleNamespace

from conftest import TWO_QUESTIONS, FakeAI
from utils import cache
from utils.cache import SessionStore
from utils.conversation_engine import ConversationEngine
from utils.wizard_session import WizardSession


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_session() -> WizardSession:
    fake_ai = FakeAI()
    engine = ConversationEngine("reflection", schedule=TWO_QUESTIONS)
    return WizardSession(engine, validator=fake_ai.validate, summarizer=fake_ai.summarize)


def test_active_session_outlives_ttl(monkeypatch):
    clock = Clock()
    monkeypatch.setattr(cache, "time", SimpleNamespace(monotonic=clock))
    store = SessionStore(ttl_seconds=3600)
    session = make_session()
    store.set(session)

    for _ in range(5):
        clock.now += 1200
        assert store.get(session.session_id) is session


def test_idle_session_expires(monkeypatch):
    clock = Clock()
    monkeypatch.setattr(cache, "time", SimpleNamespace(monotonic=clock))
    store = SessionStore(ttl_seconds=3600)
    session = make_session()
    store.set(session)

    clock.now += 3601
    assert store.get(session.session_id) is None


def test_delete_removes_session():
    store = SessionStore()
    session = make_session()
    store.set(session)

    store.delete(session.session_id)
    assert store.get(session.session_id) is None
