"""Map service error kinds to HTTP responses."""

from fastapi import HTTPException, status

from fasting_tracker.domain.errors import ErrorKind, Result

_UNPROCESSABLE = 422

_ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorKind.WEAK_PASSWORD: _UNPROCESSABLE,
    ErrorKind.MISSING_NAME: _UNPROCESSABLE,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_IDENTITY_CLAIM: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_ACTIVE_SESSION: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.CORRUPT_RECORD: _UNPROCESSABLE,
    ErrorKind.INVALID_BIRTH_DATE: _UNPROCESSABLE,
    ErrorKind.DUPLICATE_ENTRY_ID: status.HTTP_409_CONFLICT,
}


def raise_for_error(result: Result) -> None:
    """Raise an HTTPException carrying the error kind of a failed result."""
    if result.ok:
        return
    raise HTTPException(
        status_code=_ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST),
        detail={"error": str(result.error)},
    )
