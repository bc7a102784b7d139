# server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext


ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # passlib raises PasswordSizeError (a ValueError) for oversized secrets
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify():
    """
    Burns the same time as a real verification, for logins with an unknown username.
    """
    pwd_context.dummy_verify()


def create_access_token(data: dict, secret_key: str, expires_delta: timedelta, issued_at: datetime | None = None) -> str:
    to_encode = data.copy()
    issued = issued_at or datetime.now(timezone.utc)
    to_encode.update({"iat": issued, "exp": issued + expires_delta})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> dict:
    # raises jose.JWTError (ExpiredSignatureError included) on any failure
    return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
