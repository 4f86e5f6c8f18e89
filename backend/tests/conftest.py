import os
import tempfile

# must be set before scenario_hub builds its settings and engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="scenario-hub-"))
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scenario_hub.api import deps
from scenario_hub.db.init_db import init_db
from scenario_hub.main import app
from scenario_hub.models.user import User
from scenario_hub.services.storage import BundleStore


def info_toml(name="Alpha", author="A", time=1.5, extra=""):
    return f'name = "{name}"\nauthor = "{author}"\ntime = {time}\n{extra}'.encode("utf-8")


SCRIPT = b'-- scenario script\nprint("hello")\n'


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db):
    user = User(name="alice", email="alice@example.com", hashed_password="not-a-hash", verified=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def store(tmp_path):
    return BundleStore(tmp_path / "pb_public")


@pytest.fixture
def client(session_factory, store):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_bundle_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    client.post("/api/signup", json={"username": "bob", "email": "bob@example.com", "password": "hunter2"})
    response = client.post("/api/login", json={"email": "bob@example.com", "password": "hunter2"})
    return {"Authorization": response.json()["token"]}
