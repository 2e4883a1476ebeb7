"""Prover side of the protocol, talking to the HTTP service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .constants import DEFAULT_URL
from .crypto import ChaumPedersen
from .encoding import hex_to_int, int_to_hex
from .errors import AuthError, InvalidArgument, NotFound, PermissionDenied

logger = logging.getLogger(__name__)

_ERRORS = {
    NotFound.status_code: NotFound,
    PermissionDenied.status_code: PermissionDenied,
    InvalidArgument.status_code: InvalidArgument,
}


def password_to_secret(password: str) -> int:
    """Read the UTF-8 bytes of ``password`` as a big-endian integer."""

    return int.from_bytes(password.encode("utf-8"), "big")


class AuthClient:
    """Registers credentials and logs in without ever sending the password.

    ``session`` only needs a requests-style ``post(url, json=...)``, which lets
    tests hand in FastAPI's ``TestClient``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        session: Optional[Any] = None,
        engine: Optional[ChaumPedersen] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.engine = engine or ChaumPedersen()

    def _post(self, path: str, payload: Dict[str, str]) -> Dict[str, Any]:
        response = self.session.post(f"{self.base_url}{path}", json=payload)
        if response.status_code != 200:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            error = _ERRORS.get(response.status_code, AuthError)
            raise error(f"{path} failed with {response.status_code}: {detail}")
        return response.json()

    def register(self, username: str, password: str) -> None:
        y1, y2 = self.engine.commitment_pair(password_to_secret(password))
        self._post("/register", {"user": username, "y1": int_to_hex(y1), "y2": int_to_hex(y2)})
        logger.info("Registered %s", username)

    def login(self, username: str, password: str) -> str:
        k = self.engine.random_exponent()
        r1, r2 = self.engine.commitment_pair(k)
        challenge = self._post(
            "/challenge",
            {"user": username, "r1": int_to_hex(r1), "r2": int_to_hex(r2)},
        )
        auth_id = challenge["auth_id"]
        c = hex_to_int(challenge["c"], field="c")

        s = self.engine.solve(k, c, password_to_secret(password))
        answer = self._post("/verify", {"auth_id": auth_id, "s": int_to_hex(s)})
        logger.info("Logged in %s with auth id %s", username, auth_id)
        return answer["session_id"]


__all__ = ["AuthClient", "password_to_secret"]
