"""Fresh challenges and opaque identifiers for proof rounds."""

from __future__ import annotations

import secrets
from typing import Optional, Tuple

from .constants import IDENTIFIER_BYTES
from .crypto import ChaumPedersen


def new_identifier() -> str:
    """Return an unguessable URL-safe identifier."""

    return secrets.token_urlsafe(IDENTIFIER_BYTES)


class ChallengeIssuer:
    """Draws the verifier's challenge ``c`` together with a new auth id.

    Nothing is stored here; the caller records which user the id belongs to.
    """

    def __init__(self, engine: Optional[ChaumPedersen] = None) -> None:
        self.engine = engine or ChaumPedersen()

    def issue(self) -> Tuple[str, int]:
        return new_identifier(), self.engine.random_exponent()


__all__ = ["ChallengeIssuer", "new_identifier"]
