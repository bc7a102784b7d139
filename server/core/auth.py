# server/core/auth.py

import logging
from datetime import datetime, timedelta
from jose import JWTError

from core.errors import InvalidCredential, InvalidCredentials, MissingCredential
from core.security import create_access_token, decode_access_token, dummy_verify, verify_password
from core.store import PostStore
from models.user import User


logger = logging.getLogger("portfolio.auth")


class AuthGate:
    """
    Issues and verifies the bearer tokens that guard post mutations.

    Tokens are stateless: nothing is stored server-side, so a token stays
    valid until it expires.
    """

    def __init__(self, store: PostStore, secret_key: str, expire_hours: int = 8):
        self.store = store
        self.secret_key = secret_key
        self.expires_delta = timedelta(hours=expire_hours)

    def issue_token(self, user: User, issued_at: datetime | None = None) -> str:
        claims = {"sub": user.username, "id": user.id, "username": user.username}
        return create_access_token(claims, self.secret_key, self.expires_delta, issued_at=issued_at)

    def login(self, username: str, password: str) -> str:
        user = self.store.find_user_by_username(username)
        if user is None:
            dummy_verify()
            logger.warning("Login failed for unknown user %r", username)
            raise InvalidCredentials()
        if not verify_password(password, user.hashed_password):
            logger.warning("Login failed for user %r: wrong password", username)
            raise InvalidCredentials()

        logger.info("User %r logged in", username)
        return self.issue_token(user)

    def authenticate(self, authorization: str | None) -> dict:
        """
        Expects `Bearer <token>` and returns the decoded identity {id, username}.
        """
        if not authorization:
            raise MissingCredential("Missing Authorization")

        parts = authorization.split()
        if len(parts) < 2:
            raise MissingCredential("Missing token")
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise InvalidCredential("Invalid authorization header")

        try:
            payload = decode_access_token(parts[1], self.secret_key)
        except JWTError as e:
            logger.warning("Rejected bearer token: %s", e)
            raise InvalidCredential("Invalid token") from e

        username = payload.get("username") or payload.get("sub")
        if username is None:
            raise InvalidCredential("Invalid token")
        return {"id": payload.get("id"), "username": username}
