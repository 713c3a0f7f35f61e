"""Domain models for accounts and the login marker."""

from dataclasses import dataclass
from datetime import datetime

GOOGLE_AUTH_PASSWORD = "google-auth"


@dataclass(frozen=True)
class User:
    """Represents a registered account."""

    email: str
    password: str
    name: str
    created_at: datetime
    picture: str | None = None
    google_id: str | None = None

    @property
    def is_oauth_account(self) -> bool:
        """Return True for accounts created through an identity provider."""
        return self.password == GOOGLE_AUTH_PASSWORD


@dataclass(frozen=True)
class LoginState:
    """Logged-in marker kept apart from the user records."""

    is_logged_in: bool
    email: str
    name: str
