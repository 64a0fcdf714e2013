from sqlalchemy.exc import OperationalError

from main import app
from config.database import get_db
from api.user.user_model import User, UserRole


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "SRCS Volunteer Management System"}


def test_init_is_idempotent(client, db_session):
    first = client.get("/init")
    assert first.status_code == 200
    assert first.json()["success"] is True

    assert client.get("/init").json()["success"] is True

    users = {u.email: u for u in db_session.query(User).all()}
    assert set(users) == {"admin@srcs.org", "volunteer@srcs.org"}
    assert users["admin@srcs.org"].role == UserRole.admin
    assert users["volunteer@srcs.org"].name == "John Volunteer"


def test_seeded_admin_can_log_in(client):
    client.get("/init")
    res = client.post("/api/auth/login", json={"email": "admin@srcs.org", "password": "admin123"})
    assert res.status_code == 200
    assert res.json()["user"]["role"] == "admin"


def test_unknown_paths_list_capabilities(client):
    for path in ("/", "/nowhere", "/api/unknown/thing"):
        body = client.get(path).json()
        assert body["message"] == "SRCS Volunteer Management System API"
        assert "GET /health" in body["endpoints"]


def test_store_failure_is_503(client):
    def broken_db():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        yield

    app.dependency_overrides[get_db] = broken_db
    res = client.get("/api/events", headers={"Authorization": "Bearer whatever"})
    assert res.status_code == 503
    assert res.json() == {"detail": "Store unavailable"}
