"""In-memory registration and challenge stores shared across request threads."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Dict

from .errors import NotFound


@dataclass
class RegistrationRecord:
    """Public commitments for a user plus the latest proof round."""

    username: str
    y1: int
    y2: int
    r1: int = 0
    r2: int = 0
    challenge: int = 0
    solution: int = 0
    session_id: str = ""
    challenged: bool = False


@dataclass(frozen=True)
class ChallengeRecord:
    auth_id: str
    username: str


class RegistrationStore:
    """Username to ``RegistrationRecord`` map guarded by a single lock.

    Readers get copies, so a record handed out never changes underneath them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Dict[str, RegistrationRecord] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, username: object) -> bool:
        with self._lock:
            return username in self._records

    def register(self, username: str, y1: int, y2: int) -> RegistrationRecord:
        record = RegistrationRecord(username=username, y1=y1, y2=y2)
        with self._lock:
            # Re-registration replaces the old commitments and round.
            self._records[username] = record
            return dataclasses.replace(record)

    def get(self, username: str) -> RegistrationRecord:
        with self._lock:
            return dataclasses.replace(self._lookup(username))

    def update(self, username: str, /, **fields: object) -> RegistrationRecord:
        """Overwrite round fields in place and return the resulting record."""

        with self._lock:
            record = self._lookup(username)
            for name in fields:
                if name == "username" or not hasattr(record, name):
                    raise AttributeError(f"Cannot update field '{name}'")
            for name, value in fields.items():
                setattr(record, name, value)
            return dataclasses.replace(record)

    def remove(self, username: str) -> None:
        with self._lock:
            self._lookup(username)
            del self._records[username]

    def _lookup(self, username: str) -> RegistrationRecord:
        record = self._records.get(username)
        if record is None:
            raise NotFound(f"User: {username} not found")
        return record


class ChallengeStore:
    """Auth id to username map guarded by a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._challenges: Dict[str, ChallengeRecord] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)

    def __contains__(self, auth_id: object) -> bool:
        with self._lock:
            return auth_id in self._challenges

    def put_challenge(self, auth_id: str, username: str) -> ChallengeRecord:
        record = ChallengeRecord(auth_id=auth_id, username=username)
        with self._lock:
            self._challenges[auth_id] = record
        return record

    def resolve_challenge(self, auth_id: str) -> str:
        with self._lock:
            record = self._challenges.get(auth_id)
        if record is None:
            raise NotFound(f"AuthId: {auth_id} not found")
        return record.username

    def remove(self, auth_id: str) -> None:
        with self._lock:
            if self._challenges.pop(auth_id, None) is None:
                raise NotFound(f"AuthId: {auth_id} not found")


__all__ = ["ChallengeRecord", "ChallengeStore", "RegistrationRecord", "RegistrationStore"]
