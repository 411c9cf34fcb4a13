from __future__ import annotations

import pytest

from loginlab.application.services.credentials import CredentialVerifier
from loginlab.application.services.password_hashing import WerkzeugPasswordHasher
from loginlab.domain.users.entities import User
from loginlab.domain.users.exceptions import CredentialMismatchError, UserNotFoundError


def test_plain_record_matches_by_equality(users, hasher, alice) -> None:
    verifier = CredentialVerifier(users=users, password_hasher=hasher)

    assert verifier.verify("alice", "pw1") == alice
    with pytest.raises(CredentialMismatchError):
        verifier.verify("alice", "wrong")


def test_plain_record_is_not_compared_through_hasher(users, hasher, alice) -> None:
    verifier = CredentialVerifier(users=users, password_hasher=hasher)

    with pytest.raises(CredentialMismatchError):
        verifier.verify("alice", "hashed:pw1")


def test_hashed_record_matches_through_hasher(users, hasher, admin) -> None:
    verifier = CredentialVerifier(users=users, password_hasher=hasher)

    assert verifier.verify("root", "rootpw") == admin
    with pytest.raises(CredentialMismatchError):
        verifier.verify("root", "hashed:rootpw")


def test_unknown_login_id(users, hasher) -> None:
    verifier = CredentialVerifier(users=users, password_hasher=hasher)

    with pytest.raises(UserNotFoundError):
        verifier.verify("ghost", "pw")


def test_werkzeug_hasher_round_trip(users) -> None:
    real = WerkzeugPasswordHasher()
    stored = real.hash("s3cret")
    assert stored != "s3cret"
    users.save(User(id=0, login_id="carol", password=stored, nickname="Carol", password_hashed=True))

    verifier = CredentialVerifier(users=users, password_hasher=real)
    assert verifier.verify("carol", "s3cret").login_id == "carol"
    with pytest.raises(CredentialMismatchError):
        verifier.verify("carol", "S3cret")
