# src/jolokia_api_server/session_store.py

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .jolokia import ArtemisJolokia


@dataclass(frozen=True)
class SessionEntry:
    jolokia: ArtemisJolokia
    expires_at: datetime


class SessionStore:
    """
    Maps a broker name to the Jolokia handle verified at login.

    Writes are last-write-wins: a second login for the same broker replaces
    the entry. An entry lives as long as the token issued with it and is
    dropped on the first lookup after it expires.
    """

    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def set(self, broker_name: str, jolokia: ArtemisJolokia, expires_at: datetime) -> None:
        with self._lock:
            self._entries[broker_name] = SessionEntry(jolokia, expires_at)

    def get(self, broker_name: str) -> Optional[ArtemisJolokia]:
        with self._lock:
            entry = self._entries.get(broker_name)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[broker_name]
                return None
            return entry.jolokia

    def __contains__(self, broker_name: str) -> bool:
        return self.get(broker_name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
