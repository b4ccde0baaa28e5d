from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.catalog_service.app.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_verifies(self):
        password_hash = hash_password("s3cret!")

        assert password_hash.startswith("scrypt$")
        assert verify_password("s3cret!", password_hash)
        assert not verify_password("s3cret?", password_hash)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    @pytest.mark.parametrize(
        "stored",
        ["", "plaintext", "bcrypt$1$2$3$00$00", "scrypt$x$8$1$00$00", "scrypt$16384$8$1$zz$00"],
    )
    def test_malformed_hashes_never_verify(self, stored):
        assert not verify_password("anything", stored)


class TestAccessTokens:
    def test_round_trip_claims(self, test_settings):
        token = create_access_token(test_settings, 7, "ops@example.com", "admin")

        claims = decode_access_token(test_settings, token)

        assert claims["sub"] == "7"
        assert claims["email"] == "ops@example.com"
        assert claims["role"] == "admin"

    def test_expired_token(self, test_settings):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            test_settings.JWT_SECRET,
            algorithm=test_settings.JWT_ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(test_settings, token)

    def test_token_without_expiry(self, test_settings):
        token = jwt.encode(
            {"sub": "1"}, test_settings.JWT_SECRET, algorithm=test_settings.JWT_ALGORITHM
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(test_settings, token)

    def test_wrong_secret(self, test_settings):
        other = test_settings.model_copy(
            update={"JWT_SECRET": "a-completely-different-signing-secret"}
        )
        token = create_access_token(other, 1, "a@example.com", "admin")

        with pytest.raises(InvalidTokenError):
            decode_access_token(test_settings, token)

    def test_garbage_token(self, test_settings):
        with pytest.raises(InvalidTokenError):
            decode_access_token(test_settings, "abc.def.ghi")

    def test_resolve_token(self, auth_service, test_settings):
        token = create_access_token(test_settings, 3, "c@example.com", "editor")

        admin = auth_service.resolve_token(token)

        assert (admin.id, admin.email, admin.role) == (3, "c@example.com", "editor")
