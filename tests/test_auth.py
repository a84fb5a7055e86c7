import pytest

from services.auth import AuthService, friendly_auth_message
from services.errors import AuthError


def test_sign_up_then_sign_in(db):
    created = AuthService.sign_up("Someone@Example.com ", "secret1")

    signed_in = AuthService.sign_in("someone@example.com", "secret1")

    assert signed_in == created
    assert created.email == "someone@example.com"


def test_password_is_not_stored_in_plain_text(db):
    from repositories import UserRepository

    AuthService.sign_up("a@example.com", "secret1")

    stored = UserRepository.get_by_email("a@example.com")
    assert stored.password_hash != "secret1"
    assert stored.password_hash.startswith("$2")


@pytest.mark.parametrize("email, password, code", [
    ("not-an-email", "secret1", "invalid-email"),
    ("a@example.com", "12345", "weak-password"),
])
def test_sign_up_rejections(db, email, password, code):
    with pytest.raises(AuthError) as exc_info:
        AuthService.sign_up(email, password)

    assert exc_info.value.code == code


def test_duplicate_email(db):
    AuthService.sign_up("a@example.com", "secret1")

    with pytest.raises(AuthError) as exc_info:
        AuthService.sign_up("A@example.com", "another1")

    assert exc_info.value.code == "email-already-in-use"


@pytest.mark.parametrize("email, password", [
    ("a@example.com", "wrong-password"),
    ("nobody@example.com", "secret1"),
])
def test_bad_credentials(db, email, password):
    AuthService.sign_up("a@example.com", "secret1")

    with pytest.raises(AuthError) as exc_info:
        AuthService.sign_in(email, password)

    assert exc_info.value.code == "invalid-credential"


def test_friendly_messages():
    assert friendly_auth_message(AuthError("invalid-credential")) == "Invalid email or password. Please try again."
    assert friendly_auth_message(AuthError("weak-password")) == "Your password must be at least 6 characters long."
    assert friendly_auth_message(AuthError("quota-exceeded")) == "An error occurred. Please try again."
