from passlib.context import CryptContext


class PasswordHasher:
    """Salted bcrypt digests through passlib.

    Every call to `hash` draws a fresh salt, so equal passwords never share a digest.
    """

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plain: str) -> str:
        """Hash a plaintext password using bcrypt."""
        return self._context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        """Verify plaintext password against a bcrypt hash. Malformed digests never match."""
        try:
            return self._context.verify(plain, hashed)
        except (ValueError, TypeError):
            return False
