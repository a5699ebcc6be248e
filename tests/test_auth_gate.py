"""Tests for the bearer-token auth gate."""

from datetime import timedelta

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from prepository.api.deps import CurrentClaims, authenticate
from prepository.api.exceptions import register_exception_handlers
from prepository.core.errors import (
    InvalidCredentialError,
    MalformedCredentialError,
    MissingCredentialError,
)
from prepository.core.security import TokenClaims, TokenService

CLAIMS = TokenClaims(owner_id="u1", email="a@b.com")


class TestAuthenticate:
    """Test header parsing and verification reasons."""

    def test_valid(self, token_service: TokenService) -> None:
        token = token_service.issue(CLAIMS)
        assert authenticate(f"Bearer {token}", token_service) == CLAIMS

    def test_missing(self, token_service: TokenService) -> None:
        with pytest.raises(MissingCredentialError):
            authenticate(None, token_service)

    @pytest.mark.parametrize(
        "header",
        ["", "Bearer", "Bearer ", "Token abc", "bearer abc", "abc", "Bearer a b"],
    )
    def test_malformed(self, token_service: TokenService, header: str) -> None:
        with pytest.raises(MalformedCredentialError):
            authenticate(header, token_service)

    def test_invalid_token(self, token_service: TokenService) -> None:
        with pytest.raises(InvalidCredentialError):
            authenticate("Bearer not-a-jwt", token_service)

    def test_expired_token(self, token_service: TokenService) -> None:
        token = TokenService("test-secret", expires_in=timedelta(seconds=-10)).issue(CLAIMS)
        with pytest.raises(InvalidCredentialError):
            authenticate(f"Bearer {token}", token_service)


@pytest.fixture
async def gated_client(token_service: TokenService):
    """Minimal app with one gated route echoing the attached claims."""
    app = FastAPI()
    app.state.token_service = token_service
    register_exception_handlers(app)

    @app.get("/whoami")
    async def whoami(request: Request, claims: CurrentClaims) -> dict:
        attached: TokenClaims = request.state.claims
        return {"ownerId": attached.owner_id, "email": attached.email, "same": attached == claims}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestGateOverHttp:
    """All credential failures look identical to the caller."""

    async def test_claims_attached_to_request(
        self, gated_client: AsyncClient, token_service: TokenService
    ) -> None:
        token = token_service.issue(CLAIMS)
        response = await gated_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json() == {"ownerId": "u1", "email": "a@b.com", "same": True}

    async def test_uniform_unauthorized(
        self, gated_client: AsyncClient, token_service: TokenService
    ) -> None:
        expired = TokenService("test-secret", expires_in=timedelta(seconds=-10)).issue(CLAIMS)
        forged = TokenService("other-secret").issue(CLAIMS)
        header_sets = [
            {},
            {"Authorization": "Token abc"},
            {"Authorization": "Bearer"},
            {"Authorization": "Bearer garbage"},
            {"Authorization": f"Bearer {expired}"},
            {"Authorization": f"Bearer {forged}"},
        ]

        responses = [await gated_client.get("/whoami", headers=h) for h in header_sets]

        assert {r.status_code for r in responses} == {401}
        bodies = {r.text for r in responses}
        assert len(bodies) == 1
        assert responses[0].json() == {"error": "Unauthorized", "details": {}}
        assert all(r.headers["www-authenticate"] == "Bearer" for r in responses)
