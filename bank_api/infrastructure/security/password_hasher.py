import base64
import hashlib
import hmac
import os

from bank_api.config.settings import settings


class PasswordHasher:
    """
    PBKDF2-SHA256 with a random per-password salt.

    The result is a single opaque string ``algo$iterations$salt$hash``
    so it fits one column and old hashes keep verifying after the
    iteration count is raised.
    """

    DEFAULT_ALGO = "pbkdf2_sha256"
    SALT_BYTES = 16
    SEPARATOR = "$"

    @classmethod
    def hash_password(cls, password: str, *, iterations: int | None = None) -> str:
        if not password:
            raise ValueError("Password must not be empty.")

        it = iterations or settings.password_hash_iterations
        salt = os.urandom(cls.SALT_BYTES)

        dk = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt,
            it,
        )

        return cls.SEPARATOR.join(
            (
                cls.DEFAULT_ALGO,
                str(it),
                base64.b64encode(salt).decode("utf-8"),
                base64.b64encode(dk).decode("utf-8"),
            )
        )

    @classmethod
    def verify_password(cls, password: str, password_hash: str) -> bool:
        parts = (password_hash or "").split(cls.SEPARATOR)
        if len(parts) != 4:
            return False

        algo, iterations, password_salt, expected_hash = parts
        if algo != cls.DEFAULT_ALGO or not iterations.isdigit():
            return False

        try:
            salt = base64.b64decode(password_salt.encode("utf-8"), validate=True)
            expected = base64.b64decode(expected_hash.encode("utf-8"), validate=True)
        except ValueError:
            return False

        dk = hashlib.pbkdf2_hmac(
            "sha256",
            (password or "").encode("utf-8"),
            salt,
            int(iterations),
        )
        return hmac.compare_digest(dk, expected)
