"""
Authentication service for PocketLedger.
Email/password sign-up and sign-in against the User table, bcrypt hashed.
"""

import logging
import re
from dataclasses import dataclass

import bcrypt
from sqlalchemy.exc import IntegrityError

from config import get_settings
from repositories import UserRepository
from services.errors import AuthError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

EMAIL_ALREADY_IN_USE = "email-already-in-use"
INVALID_EMAIL = "invalid-email"
WEAK_PASSWORD = "weak-password"
INVALID_CREDENTIAL = "invalid-credential"

FRIENDLY_MESSAGES = {
    EMAIL_ALREADY_IN_USE: "This email address is already in use. Please try logging in.",
    INVALID_EMAIL: "Please enter a valid email address.",
    WEAK_PASSWORD: "Your password must be at least {min_length} characters long.",
    INVALID_CREDENTIAL: "Invalid email or password. Please try again.",
}


@dataclass(frozen=True)
class AuthenticatedUser:
    """The signed-in account."""
    id: int
    email: str


def friendly_auth_message(error: AuthError) -> str:
    """Translate an AuthError into a message fit for the login form."""
    template = FRIENDLY_MESSAGES.get(error.code)
    if template is None:
        logger.error(f"Auth error: {error.code} {error}")
        return "An error occurred. Please try again."
    return template.format(min_length=get_settings().min_password_length)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Sign-up and sign-in for local accounts."""

    @staticmethod
    def sign_up(email: str, password: str) -> AuthenticatedUser:
        """
        Create an account.

        Raises:
            AuthError: invalid-email, weak-password or email-already-in-use
        """
        email = _normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise AuthError(INVALID_EMAIL)
        if len(password or "") < get_settings().min_password_length:
            raise AuthError(WEAK_PASSWORD)
        if UserRepository.get_by_email(email) is not None:
            raise AuthError(EMAIL_ALREADY_IN_USE)

        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        try:
            user = UserRepository.add(email=email, password_hash=password_hash)
        except IntegrityError as e:
            raise AuthError(EMAIL_ALREADY_IN_USE) from e

        logger.info(f"Created account {user.id}")
        return AuthenticatedUser(id=user.id, email=user.email)

    @staticmethod
    def sign_in(email: str, password: str) -> AuthenticatedUser:
        """
        Check credentials.

        Raises:
            AuthError: invalid-email or invalid-credential
        """
        email = _normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise AuthError(INVALID_EMAIL)

        user = UserRepository.get_by_email(email)
        if user is None or not bcrypt.checkpw((password or "").encode("utf-8"), user.password_hash.encode("utf-8")):
            logger.warning("Failed sign-in attempt")
            raise AuthError(INVALID_CREDENTIAL)

        return AuthenticatedUser(id=user.id, email=user.email)
