"""
Malls API Backend — Password & Token Unit Tests
=================================================

What:  Tests for bcrypt hashing and x-auth-token signing/verification.

Test Strategy:
    ✅ Hashes are salted and verify only the original password
    ✅ Tokens carry _id and isAdmin and round-trip to a TokenIdentity
    ✅ Expired, foreign-signed, garbage and id-less tokens are rejected
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from mallsapi.config import settings
from mallsapi.exceptions import InvalidTokenError
from mallsapi.security import (
    TokenIdentity,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self):
        """Each hash gets its own salt."""
        assert get_password_hash("secret123") != get_password_hash("secret123")

    def test_verify_accepts_original_password(self):
        hashed = get_password_hash("secret123")
        assert verify_password("secret123", hashed) is True

    def test_verify_rejects_other_password(self):
        hashed = get_password_hash("secret123")
        assert verify_password("secret124", hashed) is False


class TestAccessTokens:

    def test_round_trip_regular_user(self):
        user_id = uuid.uuid4()
        identity = decode_access_token(create_access_token(user_id))
        assert identity == TokenIdentity(user_id=user_id, is_admin=False)

    def test_round_trip_admin(self):
        user_id = uuid.uuid4()
        identity = decode_access_token(create_access_token(user_id, is_admin=True))
        assert identity.is_admin is True

    def test_payload_uses_wire_claim_names(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, is_admin=True)
        claims = jwt.get_unverified_claims(token)
        assert claims["_id"] == str(user_id)
        assert claims["isAdmin"] is True
        assert "exp" in claims

    def test_default_expiry_is_one_hour(self):
        token = create_access_token(uuid.uuid4())
        exp = jwt.get_unverified_claims(token)["exp"]
        remaining = exp - datetime.now(timezone.utc).timestamp()
        assert 59 * 60 < remaining <= settings.token_expire_minutes * 60

    def test_expired_token_rejected(self):
        token = create_access_token(uuid.uuid4(), expires_delta=timedelta(seconds=-5))
        with pytest.raises(InvalidTokenError, match="Invalid token."):
            decode_access_token(token)

    def test_token_signed_with_other_key_rejected(self):
        forged = jwt.encode(
            {"_id": str(uuid.uuid4()), "isAdmin": True},
            "not-the-server-key",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(forged)

    def test_garbage_token_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not-a-jwt")

    def test_token_without_user_id_rejected(self):
        token = jwt.encode(
            {"isAdmin": False}, settings.jwt_private_key, algorithm=settings.jwt_algorithm
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_token_with_malformed_user_id_rejected(self):
        token = jwt.encode(
            {"_id": "507f1f77bcf86cd799439011"},
            settings.jwt_private_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_invalid_token_is_a_400(self):
        assert InvalidTokenError().status_code == 400
