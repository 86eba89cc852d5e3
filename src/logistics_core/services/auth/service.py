"""Token issuing and verification."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from ...config import AuthConfig
from ...errors import AuthenticationError
from ...models.domain import Role, TokenClaims
from ..clock import Clock, utc_now
from ..users.service import UserService
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


class AuthService:
    """Issues and verifies access tokens with an injected secret and clock.

    Credential checks happen in ``UserService``; ``issue_token`` trusts its
    caller.
    """

    def __init__(
        self,
        config: AuthConfig,
        users: Optional[UserService] = None,
        clock: Clock = utc_now,
        codec: Optional[TokenCodec] = None,
    ) -> None:
        self.config = config
        self.users = users
        self.clock = clock
        self.codec = codec or TokenCodec(algorithm=config.algorithm)

    def issue_token(self, user_id: str, email: str, role: Role | str, ttl: Optional[timedelta] = None) -> str:
        now = self.clock()
        ttl = self.config.default_ttl if ttl is None else ttl
        claims = TokenClaims(user_id=user_id, email=email, role=Role(role), issued_at=now, expires_at=now + ttl)
        return self.codec.sign(claims, self.config.secret, now, ttl)

    def verify_token(self, token: str) -> TokenClaims:
        try:
            return self.codec.validate(token, self.config.secret, self.clock())
        except AuthenticationError as exc:
            logger.warning("Rejected access token: %s", exc)
            raise

    def login(self, email: str, password: str) -> str:
        if self.users is None:
            raise RuntimeError("AuthService was built without a UserService; login is unavailable.")
        user = self.users.authenticate(email, password)
        return self.issue_token(user.id, user.email, user.role)
