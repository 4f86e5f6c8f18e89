from datetime import timedelta

import pytest

from scenario_hub.core.errors import IncorrectPassword, Unauthenticated, UnknownUser, UserExists
from scenario_hub.services import auth as auth_service


def test_password_hashing_round_trip():
    hashed = auth_service.get_password_hash("s3cret")

    assert hashed != "s3cret"
    assert auth_service.verify_password("s3cret", hashed)
    assert not auth_service.verify_password("wrong", hashed)


def test_create_user_is_verified_and_unique(db):
    user = auth_service.create_user(db, name="carol", email="carol@example.com", password="pw")

    assert user.verified is True
    assert auth_service.get_user(db, email="carol@example.com").id == user.id

    with pytest.raises(UserExists):
        auth_service.create_user(db, name="carol", email="other@example.com", password="pw")
    with pytest.raises(UserExists):
        auth_service.create_user(db, name="carol2", email="carol@example.com", password="pw")


def test_authenticate(db):
    user = auth_service.create_user(db, name="dave", email="dave@example.com", password="pw")

    assert auth_service.authenticate(db, "dave@example.com", "pw").id == user.id
    with pytest.raises(IncorrectPassword):
        auth_service.authenticate(db, "dave@example.com", "nope")
    with pytest.raises(UnknownUser):
        auth_service.authenticate(db, "nobody@example.com", "pw")


def test_issued_token_resolves_to_user(db, user):
    token = auth_service.issue_token(user)

    assert auth_service.resolve_token(db, token).id == user.id


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_resolve_token_rejects_invalid_tokens(db, token):
    with pytest.raises(Unauthenticated):
        auth_service.resolve_token(db, token)


def test_resolve_token_rejects_expired_and_orphaned_tokens(db, user):
    expired = auth_service.create_access_token({"sub": str(user.id)}, expires_delta=timedelta(minutes=-1))
    orphaned = auth_service.create_access_token({"sub": "9999"})

    with pytest.raises(Unauthenticated):
        auth_service.resolve_token(db, expired)
    with pytest.raises(Unauthenticated):
        auth_service.resolve_token(db, orphaned)
