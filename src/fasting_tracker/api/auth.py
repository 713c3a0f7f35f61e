"""Authentication endpoints and the logged-in dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from fasting_tracker.adapters.google_identity import decode_identity_claim
from fasting_tracker.api.errors import raise_for_error
from fasting_tracker.api.schemas import (
    GoogleLoginRequest,
    LoginRequest,
    RegisterRequest,
)
from fasting_tracker.domain.errors import ErrorKind, InvalidIdentityClaimError

if TYPE_CHECKING:
    from fasting_tracker.containers import AppContainer
    from fasting_tracker.domain.errors import Result
    from fasting_tracker.domain.models import User

router = APIRouter(prefix="/auth", tags=["auth"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def require_login(request: Request) -> str:
    """Return the logged-in email or reject the request."""
    state = _container(request).auth_gate.current_login()
    if state is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return state.email


def _user_payload(result: Result[User]) -> dict[str, object]:
    raise_for_error(result)
    user = result.value
    return {
        "email": user.email,
        "name": user.name,
        "picture": user.picture,
        "createdAt": user.created_at.isoformat(),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an email/password account and log it in."""
    result = _container(request).auth_gate.register(
        payload.email, payload.password, payload.name
    )
    return _user_payload(result)


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Log in with email and password."""
    result = _container(request).auth_gate.login(payload.email, payload.password)
    return _user_payload(result)


@router.post("/google")
async def login_with_google(
    payload: GoogleLoginRequest, request: Request
) -> dict[str, object]:
    """Log in with a Google Sign-In credential."""
    try:
        claim = decode_identity_claim(payload.credential)
    except InvalidIdentityClaimError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(ErrorKind.INVALID_IDENTITY_CLAIM)},
        ) from exc
    result = _container(request).auth_gate.login_with_identity_claim(
        claim.email, claim.name, picture=claim.picture, google_id=claim.sub
    )
    return _user_payload(result)


@router.post("/logout")
async def logout(request: Request) -> dict[str, str]:
    """Clear the logged-in marker."""
    _container(request).auth_gate.logout()
    return {"status": "ok"}


@router.get("/me")
async def me(request: Request) -> dict[str, object]:
    """Return the logged-in user's marker."""
    state = _container(request).auth_gate.current_login()
    if state is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return {"isLoggedIn": True, "email": state.email, "name": state.name}
