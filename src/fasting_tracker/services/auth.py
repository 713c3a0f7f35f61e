"""Account registration, login and the logged-in marker."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fasting_tracker.domain.errors import ErrorKind, Result
from fasting_tracker.domain.models import GOOGLE_AUTH_PASSWORD, LoginState, User
from fasting_tracker.services.clock import Clock, utc_now

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AccountRepository(Protocol):
    """Persistence interface for accounts and the login marker."""

    def find_user(self, email: str) -> User | None:
        """Return the user matching an email case-insensitively."""

    def add_user(self, user: User) -> None:
        """Persist a new user."""

    def get_login_state(self) -> LoginState | None:
        """Return the stored login marker, if any."""

    def save_login_state(self, state: LoginState) -> None:
        """Overwrite the login marker."""

    def clear_login_state(self) -> None:
        """Remove the login marker."""


def _is_valid_email(value: object) -> bool:
    if not isinstance(value, str):
        return False
    local, _, domain = value.strip().partition("@")
    return bool(local) and bool(domain)


@dataclass
class AuthGate:
    """Validates credentials and records who is logged in."""

    repository: AccountRepository
    clock: Clock = utc_now

    def register(self, email: str, password: str, name: str) -> Result[User]:
        """Create a password account and log it in."""
        email = email.strip().lower()
        if self.repository.find_user(email) is not None:
            return Result.failure(ErrorKind.DUPLICATE_EMAIL)
        if not name.strip():
            return Result.failure(ErrorKind.MISSING_NAME)
        if len(password) < MIN_PASSWORD_LENGTH:
            return Result.failure(ErrorKind.WEAK_PASSWORD)

        user = User(
            email=email,
            password=password,
            name=name.strip(),
            created_at=self.clock(),
        )
        self.repository.add_user(user)
        self._mark_logged_in(user)
        _logger.info("Registered user: email=%s", user.email)
        return Result.success(user)

    def login(self, email: str, password: str) -> Result[User]:
        """Log in with an email (any case) and an exact password.

        Accounts created from an identity claim never match a password.
        """
        user = self.repository.find_user(email)
        if user is None or user.is_oauth_account or user.password != password:
            return Result.failure(ErrorKind.INVALID_CREDENTIALS)
        self._mark_logged_in(user)
        return Result.success(user)

    def login_with_identity_claim(
        self,
        email: str | None,
        name: str | None,
        picture: str | None = None,
        google_id: str | None = None,
    ) -> Result[User]:
        """Log in from an already verified identity-provider claim.

        The first login creates an account that cannot use password login;
        later logins reuse the stored account as is.
        """
        if not _is_valid_email(email) or not isinstance(name, str) or not name.strip():
            return Result.failure(ErrorKind.INVALID_IDENTITY_CLAIM)

        email = email.strip().lower()
        user = self.repository.find_user(email)
        if user is None:
            user = User(
                email=email,
                password=GOOGLE_AUTH_PASSWORD,
                name=name.strip(),
                created_at=self.clock(),
                picture=picture,
                google_id=google_id,
            )
            self.repository.add_user(user)
            _logger.info("Created account from identity claim: email=%s", user.email)
        self._mark_logged_in(user)
        return Result.success(user)

    def current_login(self) -> LoginState | None:
        """Return the login marker when someone is logged in."""
        state = self.repository.get_login_state()
        if state is None or not state.is_logged_in:
            return None
        return state

    def logout(self) -> None:
        """Forget the logged-in user."""
        self.repository.clear_login_state()

    def _mark_logged_in(self, user: User) -> None:
        self.repository.save_login_state(
            LoginState(is_logged_in=True, email=user.email, name=user.name)
        )
