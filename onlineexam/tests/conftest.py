import mongomock
import pytest

from onlineexam.app import create_app, create_socketio
from onlineexam.config import load_settings
from onlineexam.mongo_adapter import DatabaseHandle, ensure_indexes


@pytest.fixture
def settings():
    return load_settings({
        "CLIENT_ORIGIN": " http://exam.test ",
        "SECRET_KEY": "test-secret",
        "SOCKETIO_ASYNC_MODE": "threading",
    })


@pytest.fixture
def database():
    client = mongomock.MongoClient()
    db = client["onlineexam_test"]
    ensure_indexes(db)
    return DatabaseHandle(client, db, True)


@pytest.fixture
def app(settings, database):
    app = create_app(settings, database)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socketio(app, settings):
    return create_socketio(app, settings)


def signup(client, role, email, name="Test User", password="pw-123456"):
    resp = client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "role": role,
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["user"]


@pytest.fixture
def teacher(app):
    c = app.test_client()
    signup(c, "teacher", "teacher@example.com", name="Ms Teacher")
    return c


@pytest.fixture
def student(app):
    c = app.test_client()
    signup(c, "student", "student@example.com", name="Sam Student")
    return c
