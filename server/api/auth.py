# server/api/auth.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from api.deps import get_auth_gate, get_current_user
from core.auth import AuthGate
from core.errors import ValidationError


router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class Token(BaseModel):
    token: str


class User(BaseModel):
    id: int | None = None
    username: str


@router.post("/login", response_model=Token)
async def login(payload: LoginRequest, gate: AuthGate = Depends(get_auth_gate)):
    if not payload.username or not payload.password:
        raise ValidationError("Missing credentials")
    # bcrypt verification is slow, keep it off the event loop
    token = await run_in_threadpool(gate.login, payload.username, payload.password)
    return {"token": token}


@router.get("/me", response_model=User)
def read_users_me(current_user: dict = Depends(get_current_user)):
    return current_user
