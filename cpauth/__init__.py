"""Chaum-Pedersen zero-knowledge password authentication."""

from .auth import AuthProtocol, AuthState
from .client import AuthClient, password_to_secret
from .crypto import (
    ChaumPedersen,
    GroupParameters,
    RandomSource,
    SystemRandomSource,
    exponentiate,
)
from .errors import AuthError, InvalidArgument, NotFound, PermissionDenied
from .issuer import ChallengeIssuer, new_identifier
from .store import ChallengeRecord, ChallengeStore, RegistrationRecord, RegistrationStore

__all__ = [
    "AuthProtocol",
    "AuthState",
    "AuthClient",
    "password_to_secret",
    "ChaumPedersen",
    "GroupParameters",
    "RandomSource",
    "SystemRandomSource",
    "exponentiate",
    "AuthError",
    "InvalidArgument",
    "NotFound",
    "PermissionDenied",
    "ChallengeIssuer",
    "new_identifier",
    "ChallengeRecord",
    "ChallengeStore",
    "RegistrationRecord",
    "RegistrationStore",
]
