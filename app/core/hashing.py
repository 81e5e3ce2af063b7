from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


class Hasher:
    @staticmethod
    def _truncate_password(password: str) -> str:
        """Cut the password to 72 bytes without splitting a UTF-8 sequence."""
        encoded = password.encode("utf-8")
        if len(encoded) <= BCRYPT_MAX_BYTES:
            return password
        return encoded[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(Hasher._truncate_password(password))

    @staticmethod
    def verify_password(plain_password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        return pwd_context.verify(Hasher._truncate_password(plain_password), password_hash)
