#!/usr/bin/env python3
"""
Auth Collaborator

Budget Buddy only needs a stable user id (used as spender id) and the
household that scopes every collection. AuthProvider is the protocol services
depend on; LocalAuthProvider is a small in-memory implementation for the CLI
and tests.
"""

import hashlib
import hmac
import logging
import secrets
import uuid
from dataclasses import dataclass, field, replace
from typing import Protocol

from .errors import InvalidInputError, InvalidStateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The signed-in user and the household they belong to."""

    user_id: str
    household_id: str | None = None
    name: str = ""
    email: str = ""


class AuthProvider(Protocol):
    """Protocol for the identity collaborator."""

    def current_identity(self) -> Identity | None:
        """The signed-in identity, or None."""
        ...

    def sign_in(self, email: str, password: str) -> Identity:
        """Sign in an existing user."""
        ...

    def sign_up(self, name: str, email: str, password: str, household_id: str | None = None) -> Identity:
        """Register a new user and sign them in."""
        ...

    def sign_out(self) -> None:
        """Forget the current identity."""
        ...

    def join_household(self, household_id: str) -> Identity:
        """Point the signed-in user at a household."""
        ...

    def leave_household(self) -> Identity:
        """Clear the signed-in user's household."""
        ...


def require_household(auth: AuthProvider) -> Identity:
    """
    Return the current identity, checking it is signed in and in a household.

    Raises:
        InvalidStateError: If nobody is signed in or the user has no household
    """
    identity = auth.current_identity()
    if identity is None:
        raise InvalidStateError("User not authenticated")
    if not identity.household_id:
        raise InvalidStateError("User not in a household")
    return identity


@dataclass
class _UserRecord:
    identity: Identity
    salt: str
    password_hash: str = field(repr=False)


def _hash_password(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), 100_000).hex()


class LocalAuthProvider:
    """
    In-memory AuthProvider.

    Examples:
        >>> auth = LocalAuthProvider.signed_in_as(Identity(user_id="u1", household_id="h1"))
        >>> auth.current_identity().household_id
        'h1'
    """

    def __init__(self) -> None:
        self._users: dict[str, _UserRecord] = {}
        self._current: Identity | None = None

    @classmethod
    def signed_in_as(cls, identity: Identity) -> "LocalAuthProvider":
        """Create a provider with a fixed identity already signed in."""
        provider = cls()
        provider._current = identity
        return provider

    def current_identity(self) -> Identity | None:
        """The signed-in identity, or None."""
        return self._current

    def sign_up(self, name: str, email: str, password: str, household_id: str | None = None) -> Identity:
        """
        Register a new user and sign them in.

        Raises:
            InvalidInputError: If the email is taken or inputs are empty
        """
        key = email.strip().lower()
        if not key or not password:
            raise InvalidInputError("Email and password are required")
        if key in self._users:
            raise InvalidInputError(f"An account already exists for {email}")

        identity = Identity(user_id=str(uuid.uuid4()), household_id=household_id, name=name, email=key)
        salt = secrets.token_hex(16)
        self._users[key] = _UserRecord(identity=identity, salt=salt, password_hash=_hash_password(password, salt))
        self._current = identity
        logger.info("Registered user %s", identity.user_id)
        return identity

    def sign_in(self, email: str, password: str) -> Identity:
        """
        Sign in an existing user.

        Raises:
            InvalidInputError: If the credentials do not match
        """
        record = self._users.get(email.strip().lower())
        if record is None or not hmac.compare_digest(
            record.password_hash, _hash_password(password, record.salt)
        ):
            raise InvalidInputError("Invalid email or password")
        self._current = record.identity
        return record.identity

    def sign_out(self) -> None:
        """Forget the current identity."""
        self._current = None

    def join_household(self, household_id: str) -> Identity:
        """
        Move the signed-in user into a household.

        Raises:
            InvalidStateError: If nobody is signed in
        """
        return self._set_household(household_id)

    def leave_household(self) -> Identity:
        """
        Take the signed-in user out of their household.

        Raises:
            InvalidStateError: If nobody is signed in
        """
        return self._set_household(None)

    def _set_household(self, household_id: str | None) -> Identity:
        if self._current is None:
            raise InvalidStateError("User not authenticated")
        identity = replace(self._current, household_id=household_id)
        if identity.email in self._users:
            self._users[identity.email].identity = identity
        self._current = identity
        return identity
