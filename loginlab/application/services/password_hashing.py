from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from loginlab.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted one-way hashes in werkzeug's ``method$salt$hash`` format."""

    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._method)

    def verify(self, password: str, hashed: str) -> bool:
        # A plain-text value is not in method$salt$hash form and never matches
        return "$" in hashed and check_password_hash(hashed, password)
