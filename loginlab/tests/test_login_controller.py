from __future__ import annotations

import pytest
from flask import Flask
from loguru import logger as loguru_logger

from loginlab.app import create_app
from loginlab.infrastructure.container import Container


@pytest.fixture()
def container(users, hasher, clock) -> Container:
    return Container(users=users, password_hasher=hasher, clock=clock)


@pytest.fixture()
def app(container: Container) -> Flask:
    flask_app = create_app(container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask):
    with app.test_client() as test_client:
        yield test_client


def _join(client, prefix: str, **overrides):
    payload = {
        "loginId": "alice",
        "password": "pw1",
        "passwordCheck": "pw1",
        "nickname": "Alice",
    }
    payload.update(overrides)
    return client.post(f"{prefix}/join", json=payload)


def test_health_and_index(client) -> None:
    assert client.get("/healthz").get_json() == {"status": "ok"}
    assert "/jwt-login" in client.get("/").get_json()["modes"]


def test_home_reports_login_type_anonymously(client) -> None:
    response = client.get("/cookie-login")

    assert response.status_code == 200
    body = response.get_json()
    assert body["loginType"] == "cookie-login"
    assert "nickname" not in body


def test_join_validation_errors_are_field_level(client) -> None:
    response = client.post("/cookie-login/join", json={"loginId": " ", "password": "x"})

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert {"loginId", "passwordCheck", "nickname"} <= set(body["context"]["fields"])


def test_join_collects_duplicate_and_mismatch(client) -> None:
    assert _join(client, "/cookie-login").status_code == 201

    response = _join(client, "/cookie-login", passwordCheck="other")

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "signup_rejected"
    assert body["context"]["fields"] == ["loginId", "nickname", "passwordCheck"]


def test_cookie_mode_flow(client) -> None:
    _join(client, "/cookie-login")

    bad = client.post("/cookie-login/login", json={"loginId": "alice", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json()["error"] == "invalid_credentials"

    login = client.post("/cookie-login/login", json={"loginId": "alice", "password": "pw1"})
    assert login.status_code == 200
    assert "userId=" in login.headers["Set-Cookie"]
    assert "Max-Age=3600" in login.headers["Set-Cookie"]

    assert client.get("/cookie-login").get_json()["nickname"] == "Alice"
    info = client.get("/cookie-login/info")
    assert info.status_code == 200
    assert info.get_json()["user"]["loginId"] == "alice"

    admin = client.get("/cookie-login/admin")
    assert admin.status_code == 302
    assert admin.headers["Location"].endswith("/cookie-login")

    client.get("/cookie-login/logout")
    assert client.get_cookie("userId") is None
    redirect = client.get("/cookie-login/info")
    assert redirect.status_code == 302
    assert redirect.headers["Location"].endswith("/cookie-login/login")


def test_cookie_with_unknown_user_id_is_an_error(client) -> None:
    client.set_cookie("userId", "9999")

    response = client.get("/cookie-login/info")

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"


def test_cookie_with_out_of_range_user_id_is_unknown_user(client) -> None:
    client.set_cookie("userId", "99999999999999999999")

    response = client.get("/cookie-login/info")

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"


def test_login_id_is_normalised_like_signup(client) -> None:
    assert _join(client, "/session-login", loginId=" bob ", nickname="Bob").status_code == 201

    for login_id in (" bob ", "bob"):
        response = client.post(
            "/session-login/login", json={"loginId": login_id, "password": "pw1"}
        )
        assert response.status_code == 200

    blank = client.post("/session-login/login", json={"loginId": "  ", "password": "pw1"})
    assert blank.status_code == 422
    assert blank.get_json()["context"]["fields"] == ["loginId"]


def test_logout_audit_names_the_user(client) -> None:
    joined = _join(client, "/cookie-login").get_json()["user"]
    client.post("/cookie-login/login", json={"loginId": "alice", "password": "pw1"})

    captured = []
    handler_id = loguru_logger.add(
        captured.append, format="{message}", filter=lambda r: r["extra"].get("audit") == "logout"
    )
    try:
        client.post("/cookie-login/logout")
    finally:
        loguru_logger.remove(handler_id)

    (message,) = captured
    assert f"user_id={joined['id']}" in message


def test_cookie_admin_page_for_admin(client) -> None:
    client.post("/cookie-login/login", json={"loginId": "admin1", "password": "1234"})
    response = client.get("/cookie-login/admin")
    assert response.status_code == 200
    assert response.get_json()["admin"] is True


def test_session_mode_flow(client, container) -> None:
    login = client.post("/session-login/login", data={"loginId": "user1", "password": "1234"})
    assert login.status_code == 200
    first_key = client.get_cookie("SESSION").value

    assert client.get("/session-login/info").status_code == 200
    assert client.get("/session-login/admin").status_code == 302

    # logging in again swaps the session id
    client.post("/session-login/login", data={"loginId": "user1", "password": "1234"})
    second_key = client.get_cookie("SESSION").value
    assert second_key != first_key
    assert container.session_store.get(first_key) is None

    client.post("/session-login/logout")
    assert container.session_store.get(second_key) is None
    assert client.get("/session-login/info").status_code == 302


def test_session_expires_after_inactivity(client, clock) -> None:
    client.post("/session-login/login", json={"loginId": "user1", "password": "1234"})

    clock.advance(1801)

    response = client.get("/session-login/info")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/session-login/login")


def test_security_mode_answers_with_status_codes(client) -> None:
    assert client.get("/security-login/info").status_code == 401

    client.post("/security-login/login", json={"loginId": "user", "password": "1234"})
    info = client.get("/security-login/info")
    assert info.status_code == 200
    principal = info.get_json()["principal"]
    assert principal["authorities"] == ["USER"]
    assert principal["kind"] == "local"
    assert principal["displayName"] == "유저1"

    denied = client.get("/security-login/admin")
    assert denied.status_code == 403
    assert denied.get_json()["error"] == "access_denied"


def test_security_mode_admin(client) -> None:
    client.post("/security-login/login", json={"loginId": "admin2", "password": "1234"})
    assert client.get("/security-login/admin").status_code == 200


def test_security_mode_signup_hashes_password(client, users) -> None:
    assert _join(client, "/security-login").status_code == 201
    stored = users.find_by_login_id("alice")
    assert stored is not None and stored.password_hashed is True
    assert stored.password != "pw1"


def test_jwt_mode_flow(client) -> None:
    login = client.post("/jwt-login/login", json={"loginId": "admin2", "password": "1234"})
    assert login.status_code == 200
    body = login.get_json()
    assert body["tokenType"] == "Bearer"
    assert "Set-Cookie" not in login.headers
    headers = {"Authorization": f"Bearer {body['token']}"}

    assert client.get("/jwt-login", headers=headers).get_json()["nickname"] == "관리자"
    assert client.get("/jwt-login/info", headers=headers).status_code == 200
    assert client.get("/jwt-login/admin", headers=headers).status_code == 200

    anonymous = client.get("/jwt-login/info")
    assert anonymous.status_code == 401
    assert anonymous.headers["WWW-Authenticate"].startswith("Bearer")


def test_jwt_expired_token_is_unauthenticated(client, clock) -> None:
    token = client.post(
        "/jwt-login/login", json={"loginId": "user", "password": "1234"}
    ).get_json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    clock.advance(3601)

    response = client.get("/jwt-login/info", headers=headers)
    assert response.status_code == 401
    assert response.get_json()["error"] == "token_expired"
    assert 'error="invalid_token"' in response.headers["WWW-Authenticate"]
    assert "nickname" not in client.get("/jwt-login", headers=headers).get_json()


def test_jwt_user_is_forbidden_from_admin(client) -> None:
    token = client.post(
        "/jwt-login/login", json={"loginId": "user", "password": "1234"}
    ).get_json()["token"]

    response = client.get("/jwt-login/admin", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_jwt_logout_asks_client_to_drop_token(client) -> None:
    response = client.post("/jwt-login/logout")
    assert response.get_json() == {"ok": True, "clearArtifact": True}


def test_unknown_route_answers_json(client) -> None:
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}
