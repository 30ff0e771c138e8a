from booklend.core.security import verify_password
from booklend.crud.users import get_user_by_email

from conftest import basic_auth


def test_admin_creates_user_who_can_then_authenticate(client, admin_headers, db_session):
    resp = client.post(
        "/users",
        json={"email": "new.reader@example.com", "password": "margin-notes"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "User created successfully"

    u = get_user_by_email(db_session, "new.reader@example.com")
    assert u is not None
    assert u.id == body["id"]
    assert u.is_admin is False
    assert u.password_hash != "margin-notes"
    assert verify_password(client.app.state.pwd_context, "margin-notes", u.password_hash)

    me = client.get("/books", headers=basic_auth("new.reader@example.com", "margin-notes"))
    assert me.status_code == 200


def test_admin_can_create_another_admin(client, admin_headers):
    resp = client.post(
        "/users",
        json={"email": "second@example.com", "password": "card-catalog", "is_admin": True},
        headers=admin_headers,
    )
    assert resp.status_code == 200

    resp = client.get(
        "/borrow-requests", headers=basic_auth("second@example.com", "card-catalog")
    )
    assert resp.status_code == 200


def test_duplicate_email_is_rejected(client, admin_headers, reader):
    resp = client.post(
        "/users",
        json={"email": reader.email, "password": "whatever-pass"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Error creating user"


def test_invalid_payload_is_a_400(client, admin_headers):
    resp = client.post(
        "/users",
        json={"email": "not-an-email", "password": "long-enough"},
        headers=admin_headers,
    )
    assert resp.status_code == 400

    resp = client.post(
        "/users",
        json={"email": "short@example.com", "password": "short"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


def test_non_admin_cannot_create_users_regardless_of_body(client, reader_headers):
    for body in (
        {"email": "x@example.com", "password": "long-enough"},
        {},
        {"email": "nope"},
    ):
        resp = client.post("/users", json=body, headers=reader_headers)
        assert resp.status_code == 403


def test_create_user_requires_authentication(client):
    resp = client.post("/users", json={"email": "x@example.com", "password": "long-enough"})
    assert resp.status_code == 401


def test_email_case_is_normalized_for_login_and_uniqueness(client, admin_headers, db_session):
    resp = client.post(
        "/users",
        json={"email": "Ann@Example.COM", "password": "reading-room"},
        headers=admin_headers,
    )
    assert resp.status_code == 200

    u = get_user_by_email(db_session, "ann@example.com")
    assert u is not None
    assert u.email == "ann@example.com"

    for typed in ("Ann@Example.COM", "ann@example.com"):
        resp = client.get("/books", headers=basic_auth(typed, "reading-room"))
        assert resp.status_code == 200

    resp = client.post(
        "/users",
        json={"email": "ANN@example.com", "password": "reading-room"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
