"""FastAPI-powered Chaum-Pedersen authentication service."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .auth import AuthProtocol
from .encoding import hex_to_int, int_to_hex
from .errors import AuthError


class RegisterRequest(BaseModel):
    user: str
    y1: str
    y2: str


class RegisterResponse(BaseModel):
    pass


class AuthenticationChallengeRequest(BaseModel):
    user: str
    r1: str
    r2: str


class AuthenticationChallengeResponse(BaseModel):
    auth_id: str
    c: str


class AuthenticationAnswerRequest(BaseModel):
    auth_id: str
    s: str


class AuthenticationAnswerResponse(BaseModel):
    session_id: str


def create_app(protocol: Optional[AuthProtocol] = None) -> FastAPI:
    """Build the HTTP service around ``protocol``.

    Handlers are plain functions, so Starlette runs them on its thread pool and
    the stores see genuinely concurrent calls.
    """

    auth = protocol or AuthProtocol()
    app = FastAPI(title="CPAuth", description="Chaum-Pedersen password authentication")
    app.state.protocol = auth

    @app.exception_handler(AuthError)
    async def _auth_error(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.post("/register", response_model=RegisterResponse)
    def register(request: RegisterRequest) -> RegisterResponse:
        auth.register(
            request.user,
            hex_to_int(request.y1, field="y1"),
            hex_to_int(request.y2, field="y2"),
        )
        return RegisterResponse()

    @app.post("/challenge", response_model=AuthenticationChallengeResponse)
    def create_authentication_challenge(
        request: AuthenticationChallengeRequest,
    ) -> AuthenticationChallengeResponse:
        auth_id, challenge = auth.create_authentication_challenge(
            request.user,
            hex_to_int(request.r1, field="r1"),
            hex_to_int(request.r2, field="r2"),
        )
        return AuthenticationChallengeResponse(auth_id=auth_id, c=int_to_hex(challenge))

    @app.post("/verify", response_model=AuthenticationAnswerResponse)
    def verify_authentication(request: AuthenticationAnswerRequest) -> AuthenticationAnswerResponse:
        session_id = auth.verify_authentication(request.auth_id, hex_to_int(request.s, field="s"))
        return AuthenticationAnswerResponse(session_id=session_id)

    return app


app = create_app()


__all__ = ["app", "create_app"]
