import bcrypt
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_password_hasher import IPasswordHasher

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @staticmethod
    def _encode(plain_password: SecretStr) -> bytes:
        return plain_password.get_secret_value().encode('utf-8')[:_BCRYPT_MAX_BYTES]

    @Logger.io
    def hash_password(self, *, plain_password: SecretStr) -> str:
        hashed = bcrypt.hashpw(self._encode(plain_password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode('utf-8')

    @Logger.io
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(plain_password), hashed_password.encode('utf-8'))
        except ValueError:
            # Malformed stored hash
            return False
