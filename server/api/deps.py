# server/api/deps.py

from fastapi import Depends, Header, Request

from config import Settings
from core.auth import AuthGate
from core.store import PostStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> PostStore:
    return request.app.state.store


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


def get_current_user(
    request: Request,
    authorization: str | None = Header(None),
    gate: AuthGate = Depends(get_auth_gate),
) -> dict:
    """
    Expect Authorization: Bearer <token>
    Returns the decoded identity and keeps it on request.state, or raises 401.
    """
    user = gate.authenticate(authorization)
    request.state.user = user
    return user
