"""Decode Google Sign-In credentials into identity claims.

The credential's signature is checked by the sign-in widget that issued it;
this module only reads the payload and checks its shape.
"""

import base64
import binascii
import json

from pydantic import BaseModel, ValidationError

from fasting_tracker.domain.errors import InvalidIdentityClaimError

_JWT_SEGMENTS = 3


class IdentityClaim(BaseModel):
    """Fields read from a Google ID token payload."""

    email: str
    name: str
    picture: str | None = None
    sub: str | None = None


def _decode_segment(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def decode_identity_claim(credential: str) -> IdentityClaim:
    """Return the claim carried by a JWT credential."""
    parts = credential.split(".")
    if len(parts) != _JWT_SEGMENTS:
        raise InvalidIdentityClaimError("Credential is not a JWT")
    try:
        payload = json.loads(_decode_segment(parts[1]))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidIdentityClaimError("Credential payload is unreadable") from exc
    try:
        return IdentityClaim.model_validate(payload)
    except ValidationError as exc:
        raise InvalidIdentityClaimError("Credential payload lacks email or name") from exc
