"""Signed, time-limited access tokens.

Tokens are HS256 JWTs. Besides the registered ``sub``/``iat``/``exp`` claims
(whole seconds, for other JWT consumers) the payload carries ``iat_ms`` and
``exp_ms`` in epoch milliseconds; expiry is decided on ``exp_ms`` alone.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from ...errors import SignatureInvalidError, TokenExpiredError
from ...models.domain import Role, TokenClaims

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

# Expiry is checked against exp_ms after the signature has been verified.
_DECODE_OPTIONS = {"verify_exp": False, "verify_iat": False, "verify_nbf": False}


def _as_utc(instant: datetime) -> datetime:
    return instant.replace(tzinfo=timezone.utc) if instant.tzinfo is None else instant


def to_millis(instant: datetime) -> int:
    return (_as_utc(instant) - EPOCH) // _ONE_MS


def from_millis(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=millis)


class TokenCodec:
    """Encodes claim sets into signed strings and back."""

    def __init__(self, algorithm: str = "HS256") -> None:
        self.algorithm = algorithm

    def sign(self, claims: TokenClaims | dict[str, Any], secret: str, issued_at: datetime, ttl: timedelta) -> str:
        """Sign ``claims`` so that the token expires at ``issued_at + ttl``.

        ``claims`` may be a ``TokenClaims`` (its own timestamps are ignored) or a
        mapping with ``user_id``, ``email`` and ``role``.
        """
        if isinstance(claims, TokenClaims):
            user_id, email, role = claims.user_id, claims.email, claims.role
        else:
            user_id, email, role = claims["user_id"], claims["email"], claims["role"]

        # The issue instant is recorded at millisecond precision and expiry is
        # derived from that recorded value, never from the finer original.
        issued_ms = to_millis(issued_at)
        expires_ms = to_millis(from_millis(issued_ms) + ttl)
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": Role(role).value,
            "iat": issued_ms // 1000,
            "exp": -(-expires_ms // 1000),
            "iat_ms": issued_ms,
            "exp_ms": expires_ms,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def validate(self, token: str, secret: str, now: datetime) -> TokenClaims:
        """Return the claims of ``token`` if it verifies under ``secret`` and has not expired at ``now``.

        Timestamps in the token have millisecond granularity: ``issued_at`` is
        truncated to the millisecond when signing, and the token stays valid while
        ``now <= expires_at``, so a token presented exactly at its expiry instant
        is accepted and any later instant is rejected.

        Raises:
            SignatureInvalidError: malformed token, wrong secret or tampered payload.
            TokenExpiredError: valid signature, but ``now`` is after the expiry instant.
        """
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm], options=_DECODE_OPTIONS)
        except (JWTError, AttributeError, TypeError) as exc:
            raise SignatureInvalidError() from exc

        try:
            claims = TokenClaims(
                user_id=str(payload["sub"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
                issued_at=from_millis(int(payload["iat_ms"])),
                expires_at=from_millis(int(payload["exp_ms"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SignatureInvalidError("token payload is malformed") from exc

        if _as_utc(now) > claims.expires_at:
            raise TokenExpiredError()
        return claims
