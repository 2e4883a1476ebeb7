"""Error kinds raised by the authentication core."""

from __future__ import annotations


class AuthError(Exception):
    """Base class for failures reported back to the caller."""

    status_code = 500


class NotFound(AuthError):
    """A username or auth id is not known to the server."""

    status_code = 404


class PermissionDenied(AuthError):
    """The submitted proof did not verify."""

    status_code = 403


class InvalidArgument(AuthError):
    """A request field could not be decoded."""

    status_code = 400


__all__ = ["AuthError", "InvalidArgument", "NotFound", "PermissionDenied"]
