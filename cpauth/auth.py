"""Server side protocol: register, issue challenge, verify answer."""

from __future__ import annotations

import enum
import logging
from typing import Optional, Tuple

from .crypto import ChaumPedersen
from .errors import InvalidArgument, NotFound, PermissionDenied
from .issuer import ChallengeIssuer, new_identifier
from .store import ChallengeStore, RegistrationStore

logger = logging.getLogger(__name__)


class AuthState(enum.Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    CHALLENGE_ISSUED = "challenge_issued"
    AUTHENTICATED = "authenticated"


def _check_username(username: object) -> str:
    if not isinstance(username, str) or not username:
        raise InvalidArgument("Username must be a non-empty string")
    return username


def _check_integer(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument(f"{field} must be a non-negative integer")
    return value


class AuthProtocol:
    """Sequences register, challenge and verify against the two stores.

    Each call holds at most one store lock at a time; verification resolves the
    auth id in the challenge store before it reads the user record. There is no
    transaction spanning a challenge and its verification: a second challenge
    for the same user overwrites the round an earlier auth id refers to.
    """

    def __init__(
        self,
        engine: Optional[ChaumPedersen] = None,
        registrations: Optional[RegistrationStore] = None,
        challenges: Optional[ChallengeStore] = None,
        issuer: Optional[ChallengeIssuer] = None,
    ) -> None:
        self.engine = engine or ChaumPedersen()
        self.engine.params.validate()
        self.registrations = registrations if registrations is not None else RegistrationStore()
        self.challenges = challenges if challenges is not None else ChallengeStore()
        self.issuer = issuer or ChallengeIssuer(self.engine)

    def register(self, username: str, y1: int, y2: int) -> None:
        username = _check_username(username)
        self.registrations.register(username, _check_integer(y1, "y1"), _check_integer(y2, "y2"))
        logger.info("Registered user %s", username)

    def create_authentication_challenge(self, username: str, r1: int, r2: int) -> Tuple[str, int]:
        username = _check_username(username)
        r1 = _check_integer(r1, "r1")
        r2 = _check_integer(r2, "r2")

        auth_id, challenge = self.issuer.issue()
        try:
            self.registrations.update(username, r1=r1, r2=r2, challenge=challenge, challenged=True)
        except NotFound:
            logger.warning("Challenge requested for unknown user %s", username)
            raise
        self.challenges.put_challenge(auth_id, username)
        logger.info("Issued challenge %s for user %s", auth_id, username)
        return auth_id, challenge

    def verify_authentication(self, auth_id: str, s: int) -> str:
        s = _check_integer(s, "s")
        try:
            username = self.challenges.resolve_challenge(auth_id)
        except NotFound:
            logger.warning("Verification attempted with unknown auth id %s", auth_id)
            raise

        try:
            record = self.registrations.update(username, solution=s)
        except NotFound as exc:
            raise RuntimeError(f"Auth id {auth_id} refers to missing user {username}") from exc

        if not self.engine.verify(record.y1, record.y2, record.r1, record.r2, record.challenge, s):
            logger.warning("Wrong challenge solution for user %s", username)
            raise PermissionDenied(f"AuthId: {auth_id} bad solution to the challenge")

        session_id = new_identifier()
        self.registrations.update(username, session_id=session_id)
        logger.info("Correct challenge solution for user %s", username)
        return session_id

    def state(self, username: str) -> AuthState:
        try:
            record = self.registrations.get(username)
        except NotFound:
            return AuthState.UNREGISTERED
        if not record.challenged:
            return AuthState.REGISTERED
        # A session only counts while the stored answer fits the current round.
        if record.session_id and self.engine.verify(
            record.y1, record.y2, record.r1, record.r2, record.challenge, record.solution
        ):
            return AuthState.AUTHENTICATED
        return AuthState.CHALLENGE_ISSUED


__all__ = ["AuthProtocol", "AuthState"]
