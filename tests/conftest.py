import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.store import PostStore
from main import create_app


ADMIN_PASSWORD = "correct horse battery staple"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret="test-secret",
        admin_password=ADMIN_PASSWORD,
        database_path=tmp_path / "blog.db",
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def store(tmp_path):
    store = PostStore(tmp_path / "store.db")
    store.init()
    yield store
    store.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def auth_headers(client):
    res = client.post("/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['token']}"}
