"""One-way password hashing."""

from __future__ import annotations

from typing import Protocol, Sequence

from passlib.context import CryptContext


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool: ...


class PasslibPasswordHasher:
    """PasswordHasher backed by a passlib ``CryptContext``."""

    def __init__(self, schemes: Sequence[str] = ("pbkdf2_sha256",)) -> None:
        self.context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self.context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return self.context.verify(plaintext, hashed)
        except ValueError:
            # Stored value is not a hash this context recognises.
            return False
