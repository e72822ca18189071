from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth import (
    InvalidToken,
    create_token,
    generate_token,
    hash_password,
    verify_password,
    verify_token,
)
from config import JWT_ALGORITHM, JWT_SECRET


def test_hash_and_verify_password():
    hashed = hash_password("password123")

    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_hash_is_salted():
    assert hash_password("password123") != hash_password("password123")


def test_verify_password_with_malformed_hash_returns_false():
    assert verify_password("password123", "not-a-bcrypt-hash") is False


def test_generate_token_is_six_digits():
    for _ in range(50):
        token = generate_token()
        assert len(token) == 6
        assert token.isdigit()


def test_session_token_round_trip():
    token = create_token(42)
    assert verify_token(token) == 42


def test_tampered_token_is_rejected():
    header, _, signature = create_token(42).split(".")
    _, other_payload, _ = create_token(43).split(".")
    with pytest.raises(InvalidToken):
        verify_token(f"{header}.{other_payload}.{signature}")


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidToken):
        verify_token("not_valid")


def test_expired_token_is_rejected():
    expired = jwt.encode(
        {"user_id": 1, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        verify_token(expired)


def test_token_without_user_id_is_rejected():
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        verify_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode(
        {"user_id": 1, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        verify_token(token)
