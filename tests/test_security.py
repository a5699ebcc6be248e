"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from prepository.core.config import Settings
from prepository.core.errors import InvalidTokenError
from prepository.core.security import (
    TokenClaims,
    TokenService,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Test bcrypt hashing and verification."""

    def test_round_trip(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("secret1", hashed)

    def test_wrong_password(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        assert not verify_password("wrong", hashed)

    def test_hash_is_salted(self) -> None:
        """Same plaintext gives different blobs that both verify."""
        first = hash_password("secret1", rounds=4)
        second = hash_password("secret1", rounds=4)
        assert first != second
        assert verify_password("secret1", first)
        assert verify_password("secret1", second)

    def test_hash_does_not_contain_plaintext(self) -> None:
        assert "secret1" not in hash_password("secret1", rounds=4)

    @pytest.mark.parametrize("blob", ["", "not-a-hash", "$2b$04$short"])
    def test_malformed_hash_is_not_a_match(self, blob: str) -> None:
        assert verify_password("secret1", blob) is False

    def test_default_rounds_come_from_settings(self) -> None:
        # conftest sets BCRYPT_ROUNDS=4
        assert hash_password("secret1").startswith("$2b$04$")


class TestTokenService:
    """Test token issue/verify contract."""

    def test_round_trip(self, token_service: TokenService) -> None:
        claims = TokenClaims(owner_id="u1", email="a@b.com")
        assert token_service.verify(token_service.issue(claims)) == claims

    def test_payload_fields(self, token_service: TokenService) -> None:
        token = token_service.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        payload = jwt.get_unverified_claims(token)
        assert payload["sub"] == "u1"
        assert payload["email"] == "a@b.com"
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_secret_not_in_token_or_repr(self, token_service: TokenService) -> None:
        token = token_service.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        assert "test-secret" not in token
        assert "test-secret" not in repr(token_service)

    def test_altered_signature_fails(self, token_service: TokenService) -> None:
        token = token_service.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        head, payload, signature = token.split(".")
        flipped = ("B" if signature[0] == "A" else "A") + signature[1:]
        with pytest.raises(InvalidTokenError):
            token_service.verify(f"{head}.{payload}.{flipped}")

    def test_altered_payload_fails(self, token_service: TokenService) -> None:
        good = token_service.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        forged = token_service.issue(TokenClaims(owner_id="u2", email="a@b.com"))
        head, _, signature = good.split(".")
        _, forged_payload, _ = forged.split(".")
        with pytest.raises(InvalidTokenError):
            token_service.verify(f"{head}.{forged_payload}.{signature}")

    def test_expired_token_fails(self) -> None:
        expired = TokenService("test-secret", expires_in=timedelta(seconds=-10))
        token = expired.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        with pytest.raises(InvalidTokenError):
            expired.verify(token)

    def test_other_secret_fails(self, token_service: TokenService) -> None:
        token = TokenService("other-secret").issue(TokenClaims(owner_id="u1", email="a@b.com"))
        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_fails(self, token_service: TokenService, token: str) -> None:
        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_missing_identity_claims_fail(self, token_service: TokenService) -> None:
        token = jwt.encode({"sub": "u1"}, "test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_from_settings(self) -> None:
        settings = Settings(secret_key="fallback", jwt_secret_key="", access_token_expire_days=7)
        service = TokenService.from_settings(settings)
        assert service.expires_in == timedelta(days=7)
        token = service.issue(TokenClaims(owner_id="u1", email="a@b.com"))
        assert TokenService("fallback").verify(token).owner_id == "u1"
