import bcrypt

from config import ApplicationConfig

_dummy_hash: bytes | None = None


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds or ApplicationConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False


def verify_dummy_password(password: str) -> None:
    """Spend one bcrypt check so unknown emails cost as much as wrong passwords."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))
    bcrypt.checkpw(password.encode(), _dummy_hash)
