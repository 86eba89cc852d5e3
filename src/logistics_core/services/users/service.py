"""User registration and credential checks."""

from __future__ import annotations

import logging
from typing import Optional

from ...errors import InvalidArgumentError, InvalidCredentialsError, NotFoundError
from ...models.domain import Role, User
from ...persistence.base import UserRepository
from ..auth.passwords import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher, default_role: Role = Role.USER) -> None:
        self.users = users
        self.hasher = hasher
        self.default_role = default_role

    def register(self, name: str, email: str, password: str, role: Optional[Role | str] = None) -> User:
        """Store a new user with a hashed password.

        Duplicate emails are rejected by the repository, not checked here.
        """
        if not name.strip():
            raise InvalidArgumentError("User name must not be empty.")
        if "@" not in email:
            raise InvalidArgumentError(f"Invalid email address '{email}'.")
        if not password:
            raise InvalidArgumentError("Password must not be empty.")

        user = self.users.save(
            User(
                name=name.strip(),
                email=email,
                password_hash=self.hasher.hash(password),
                role=Role(role) if role else self.default_role,
            )
        )
        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.users.find_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt for %s", email)
            raise InvalidCredentialsError()
        return user

    def get_user(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user
