"""Tests for registration and login."""

import pytest

from fasting_tracker.domain.errors import ErrorKind
from fasting_tracker.domain.models import GOOGLE_AUTH_PASSWORD, LoginState
from fasting_tracker.services.auth import AuthGate
from fasting_tracker.services.repository import RecordRepository
from tests.conftest import FakeClock


@pytest.fixture
def gate(repository: RecordRepository, clock: FakeClock) -> AuthGate:
    return AuthGate(repository, clock=clock)


def test_register_persists_user_and_logs_in(
    gate: AuthGate, repository: RecordRepository, clock: FakeClock
) -> None:
    result = gate.register("Ann@X.com", "secret1", "  Ann  ")

    assert result.ok
    assert result.value.email == "ann@x.com"
    assert result.value.name == "Ann"
    assert result.value.created_at == clock.now
    assert repository.find_user("ann@x.com") == result.value
    assert gate.current_login() == LoginState(
        is_logged_in=True, email="ann@x.com", name="Ann"
    )


@pytest.mark.parametrize("email", ["a@x.com", "A@X.COM"])
def test_register_duplicate_email_is_rejected(gate: AuthGate, email: str) -> None:
    gate.register("a@x.com", "secret1", "Ann")

    result = gate.register(email, "secret1", "Ann")

    assert result.error is ErrorKind.DUPLICATE_EMAIL


def test_register_weak_password(gate: AuthGate, repository: RecordRepository) -> None:
    result = gate.register("a@x.com", "12345", "Ann")

    assert result.error is ErrorKind.WEAK_PASSWORD
    assert repository.list_users() == []
    assert gate.current_login() is None


def test_register_missing_name(gate: AuthGate) -> None:
    assert gate.register("a@x.com", "secret1", "   ").error is ErrorKind.MISSING_NAME


def test_login_matches_email_case_insensitively(gate: AuthGate) -> None:
    gate.register("a@x.com", "secret1", "Ann")
    gate.logout()

    result = gate.login("A@x.COM", "secret1")

    assert result.ok
    assert gate.current_login().email == "a@x.com"


@pytest.mark.parametrize(
    ("email", "password"),
    [("a@x.com", "Secret1"), ("a@x.com", "wrong!!"), ("b@x.com", "secret1")],
)
def test_login_rejects_bad_credentials(
    gate: AuthGate, email: str, password: str
) -> None:
    gate.register("a@x.com", "secret1", "Ann")
    gate.logout()

    result = gate.login(email, password)

    assert result.error is ErrorKind.INVALID_CREDENTIALS
    assert gate.current_login() is None


def test_identity_claim_creates_oauth_account(
    gate: AuthGate, repository: RecordRepository
) -> None:
    result = gate.login_with_identity_claim(
        "g@x.com", "Gina", picture="https://img/g.png", google_id="sub-1"
    )

    assert result.ok
    user = repository.find_user("g@x.com")
    assert user.password == GOOGLE_AUTH_PASSWORD
    assert user.is_oauth_account
    assert user.google_id == "sub-1"
    assert gate.current_login().email == "g@x.com"


def test_oauth_account_cannot_use_password_login(gate: AuthGate) -> None:
    gate.login_with_identity_claim("g@x.com", "Gina")
    gate.logout()

    result = gate.login("g@x.com", GOOGLE_AUTH_PASSWORD)

    assert result.error is ErrorKind.INVALID_CREDENTIALS
    assert gate.current_login() is None


def test_identity_claim_reuses_existing_user(
    gate: AuthGate, repository: RecordRepository
) -> None:
    gate.register("a@x.com", "secret1", "Ann")
    gate.logout()

    result = gate.login_with_identity_claim("A@X.com", "Somebody Else")

    assert result.value.name == "Ann"
    assert result.value.password == "secret1"
    assert len(repository.list_users()) == 1
    assert gate.current_login().name == "Ann"


def test_identity_claim_email_is_normalized_before_lookup(
    gate: AuthGate, repository: RecordRepository
) -> None:
    gate.register("a@x.com", "secret1", "Ann")
    gate.logout()

    result = gate.login_with_identity_claim(" A@X.COM ", "Ann")

    assert result.ok
    assert [user.email for user in repository.list_users()] == ["a@x.com"]
    assert gate.current_login().email == "a@x.com"


def test_identity_claim_stores_normalized_email(
    gate: AuthGate, repository: RecordRepository
) -> None:
    gate.login_with_identity_claim(" G@X.com ", "Gina")

    assert [user.email for user in repository.list_users()] == ["g@x.com"]
    assert gate.current_login().email == "g@x.com"


def test_register_trims_email_before_duplicate_check(gate: AuthGate) -> None:
    gate.register("a@x.com", "secret1", "Ann")

    result = gate.register(" a@x.com ", "secret1", "Ann")

    assert result.error is ErrorKind.DUPLICATE_EMAIL


@pytest.mark.parametrize(
    ("email", "name"),
    [
        (None, "Gina"),
        ("", "Gina"),
        ("not-an-email", "Gina"),
        ("g@x.com", None),
        ("g@x.com", "  "),
    ],
)
def test_identity_claim_requires_email_and_name(
    gate: AuthGate, email: str | None, name: str | None
) -> None:
    result = gate.login_with_identity_claim(email, name)

    assert result.error is ErrorKind.INVALID_IDENTITY_CLAIM
    assert gate.current_login() is None


def test_logout_clears_marker(gate: AuthGate, repository: RecordRepository) -> None:
    gate.register("a@x.com", "secret1", "Ann")

    gate.logout()

    assert gate.current_login() is None
    assert repository.get_login_state() is None


def test_marker_with_logged_out_flag_counts_as_logged_out(
    gate: AuthGate, repository: RecordRepository
) -> None:
    repository.save_login_state(LoginState(is_logged_in=False, email="a", name="A"))

    assert gate.current_login() is None
