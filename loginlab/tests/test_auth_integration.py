from __future__ import annotations

import pytest

from loginlab.app import create_app
from loginlab.domain.users.entities import User
from loginlab.infrastructure.db import SessionLocal, drop_db, init_db
from loginlab.infrastructure.db.models import User as UserRow
from loginlab.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)


@pytest.fixture(autouse=True)
def reset_database() -> None:
    drop_db()
    init_db()
    yield
    drop_db()


def test_repository_round_trip() -> None:
    repo = SqlAlchemyUserRepository()

    saved = repo.save(User(id=0, login_id="dora", password="pw", nickname="Dora"))

    assert saved.id > 0
    assert repo.find_by_id(saved.id) == saved
    assert repo.find_by_login_id("dora") == saved
    assert repo.exists_by_login_id("dora") is True
    assert repo.exists_by_nickname("Dora") is True
    assert repo.exists_by_login_id("nobody") is False
    assert repo.find_by_id(saved.id + 100) is None


def test_seeded_app_login_flows() -> None:
    app = create_app()

    with app.test_client() as client:
        login = client.post("/session-login/login", json={"loginId": "admin1", "password": "1234"})
        assert login.status_code == 200
        assert client.get("/session-login/admin").status_code == 200

        token = client.post(
            "/jwt-login/login", json={"loginId": "admin2", "password": "1234"}
        ).get_json()["token"]
        admin = client.get("/jwt-login/admin", headers={"Authorization": f"Bearer {token}"})
        assert admin.status_code == 200

    # seeding twice does not duplicate the demo accounts
    create_app()
    session = SessionLocal()
    try:
        assert session.query(UserRow).count() == 4
        hashed = {row.login_id for row in session.query(UserRow).filter(UserRow.password_hashed.is_(True))}
        assert hashed == {"admin2", "user"}
    finally:
        session.close()


def test_register_login_logout_flow() -> None:
    app = create_app()

    with app.test_client() as client:
        join = client.post(
            "/cookie-login/join",
            json={"loginId": "alice", "password": "pw1", "passwordCheck": "pw1", "nickname": "Alice"},
        )
        assert join.status_code == 201

        duplicate = client.post(
            "/cookie-login/join",
            json={"loginId": "alice", "password": "pw1", "passwordCheck": "pw1", "nickname": "Alice2"},
        )
        assert duplicate.status_code == 422
        assert duplicate.get_json()["context"]["fields"] == ["loginId"]

        assert client.post(
            "/cookie-login/login", json={"loginId": "alice", "password": "pw1"}
        ).status_code == 200
        assert client.get("/cookie-login/info").get_json()["user"]["nickname"] == "Alice"

        client.get("/cookie-login/logout")
        assert client.get("/cookie-login/info").status_code == 302

    session = SessionLocal()
    try:
        assert session.query(UserRow).filter(UserRow.login_id == "alice").count() == 1
    finally:
        session.close()


def test_oversized_cookie_id_is_unknown_user_against_sqlite() -> None:
    app = create_app()

    with app.test_client() as client:
        client.set_cookie("userId", "99999999999999999999")
        response = client.get("/cookie-login/info")

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"
