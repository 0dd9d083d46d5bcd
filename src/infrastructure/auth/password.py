from __future__ import annotations

from passlib.context import CryptContext


class PasswordHasher:
    """bcrypt via passlib; hashes from older schemes are upgraded on the next login."""

    def __init__(self, schemes: tuple[str, ...] = ("bcrypt",), bcrypt_rounds: int = 12) -> None:
        options = {"bcrypt__rounds": bcrypt_rounds} if "bcrypt" in schemes else {}
        self._pwd_context = CryptContext(schemes=list(schemes), deprecated="auto", **options)

    def hash(self, password: str) -> str:
        return self._pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        # Unknown or corrupted hashes count as a failed login
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        try:
            return self._pwd_context.needs_update(hashed_password)
        except ValueError:
            return False
