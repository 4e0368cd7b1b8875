"""
Security Utilities Unit Tests
"""

from datetime import timedelta

from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret!")

        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("s3cret!", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_round_trip_carries_subject_and_role(self):
        token = create_access_token(subject="user-1", role="creator")

        payload = decode_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["role"] == "creator"

    def test_expired_token_is_rejected(self):
        token = create_access_token(subject="user-1", expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert decode_access_token("not.a.token") is None
