"""Tests for the access guard's token resolution."""

import pytest

from auth import dependencies, security


class TestExtractBearerToken:
    def test_valid_header(self):
        assert dependencies._extract_bearer_token("Bearer abc.def") == "abc.def"

    def test_scheme_is_case_insensitive(self):
        assert dependencies._extract_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "abc", "Basic abc", "Bearer "])
    def test_invalid_headers(self, header):
        with pytest.raises(security.AuthSecurityError):
            dependencies._extract_bearer_token(header)


class TestGetAuthContext:
    @pytest.mark.asyncio
    async def test_no_headers_is_unauthenticated(self, store):
        """No token means an anonymous context, not an error."""
        ctx = await dependencies.get_auth_context(authorization=None, x_jwt=None)

        assert not ctx.is_authenticated
        assert ctx.failure

    @pytest.mark.asyncio
    async def test_bearer_token_resolves_user(self, listener):
        """A valid bearer token binds the user row."""
        ctx = await dependencies.get_auth_context(
            authorization=f"Bearer {listener['token']}",
            x_jwt=None,
        )

        assert ctx.is_authenticated
        assert ctx.user["id"] == listener["id"]

    @pytest.mark.asyncio
    async def test_x_jwt_header_resolves_user(self, listener):
        """The x-jwt header is accepted as well."""
        ctx = await dependencies.get_auth_context(authorization=None, x_jwt=listener["token"])

        assert ctx.user["email"] == "ttt@ttt.com"

    @pytest.mark.asyncio
    async def test_authorization_wins_over_x_jwt(self, listener):
        """When both headers are sent, Authorization is used."""
        ctx = await dependencies.get_auth_context(
            authorization="Bearer wrongToken",
            x_jwt=listener["token"],
        )

        assert not ctx.is_authenticated

    @pytest.mark.asyncio
    async def test_invalid_token_is_unauthenticated(self, store):
        ctx = await dependencies.get_auth_context(authorization=None, x_jwt="wrongToken")

        assert not ctx.is_authenticated
        assert ctx.failure == "Invalid access token."

    @pytest.mark.asyncio
    async def test_token_for_deleted_user_is_unauthenticated(self, store):
        """A well-formed token whose user is gone does not authenticate."""
        token = security.build_access_token(user_id=999)

        ctx = await dependencies.get_auth_context(authorization=f"Bearer {token}", x_jwt=None)

        assert not ctx.is_authenticated
