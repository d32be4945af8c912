from datetime import datetime, timedelta, timezone

import pytest

from carechat.auth import create_token, decode_token, get_current_user
from carechat.errors import Forbidden, Unauthenticated

SECRET = "test-secret"


def test_round_trip_claims():
    token = create_token(7, "alice", secret=SECRET)

    user = decode_token(token, secret=SECRET)

    assert user.user_id == 7
    assert user.username == "alice"


def test_same_inputs_give_same_token():
    issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert create_token(1, "a", secret=SECRET, issued_at=issued) == create_token(
        1, "a", secret=SECRET, issued_at=issued
    )


def test_missing_token_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        decode_token(None, secret=SECRET)
    with pytest.raises(Unauthenticated):
        decode_token("", secret=SECRET)


def test_wrong_secret_is_forbidden():
    token = create_token(1, "alice", secret="another-secret")

    with pytest.raises(Forbidden):
        decode_token(token, secret=SECRET)


def test_garbage_token_is_forbidden():
    with pytest.raises(Forbidden):
        decode_token("not-a-jwt", secret=SECRET)


def test_token_expires_after_24_hours():
    issued = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
    token = create_token(1, "alice", secret=SECRET, issued_at=issued)

    with pytest.raises(Forbidden):
        decode_token(token, secret=SECRET)


def test_token_valid_just_before_expiry():
    issued = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
    token = create_token(1, "alice", secret=SECRET, issued_at=issued)

    assert decode_token(token, secret=SECRET).user_id == 1


def test_header_without_bearer_token():
    with pytest.raises(Unauthenticated):
        get_current_user(None)
    with pytest.raises(Unauthenticated):
        get_current_user("Bearer")


def test_header_with_bearer_token():
    token = create_token(3, "carol")

    assert get_current_user(f"Bearer {token}").username == "carol"
