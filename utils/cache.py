"""In-memory wizard session store."""
import time
from typing import Dict, Optional, Tuple

from utils.wizard_session import WizardSession


class SessionStore:
    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._mem: Dict[str, Tuple[float, WizardSession]] = {}

    def get(self, session_id: str) -> Optional[WizardSession]:
        item = self._mem.get(session_id)
        if item is None:
            return None
        stored_at, session = item
        if time.monotonic() - stored_at > self.ttl_seconds:
            del self._mem[session_id]
            return None
        # Sliding expiry: every access keeps an active session alive.
        self._mem[session_id] = (time.monotonic(), session)
        return session

    def set(self, session: WizardSession) -> None:
        self._purge_expired()
        self._mem[session.session_id] = (time.monotonic(), session)

    def delete(self, session_id: str) -> None:
        self._mem.pop(session_id, None)

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired = [sid for sid, (stored_at, _) in self._mem.items() if now - stored_at > self.ttl_seconds]
        for sid in expired:
            del self._mem[sid]
