"""
BrandAgent Backend - Auth Service Tests
=========================================

What:  register / login / verify_token against a real temporary SQLite store.
Why a real store: uniqueness is enforced by the unique index, which a mock
    session cannot reproduce.
"""

import asyncio

import pytest

from brandagent.exceptions import AuthError, ConflictError, InternalError, ValidationError
from brandagent.services.auth_service import AuthService
from brandagent.services.user_service import user_service


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_stores_lowercased_email_and_default_role(self, store, auth_service):
        user = await auth_service.register(store, "Alice@Example.COM", "pw123")
        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.role == "jobseeker"
        assert user.password_hash != "pw123"

    @pytest.mark.asyncio
    async def test_register_keeps_explicit_role(self, store, auth_service):
        user = await auth_service.register(store, "boss@example.com", "pw", "employer")
        assert user.role == "employer"

    @pytest.mark.asyncio
    async def test_empty_role_falls_back_to_default(self, store, auth_service):
        user = await auth_service.register(store, "someone@example.com", "pw", "")
        assert user.role == "jobseeker"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_regardless_of_password_or_role(self, store, auth_service):
        await auth_service.register(store, "alice@example.com", "pw123")
        with pytest.raises(ConflictError, match="user exists"):
            await auth_service.register(store, "alice@example.com", "different", "admin")

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_case_insensitively(self, store, auth_service):
        await auth_service.register(store, "alice@example.com", "pw123")
        with pytest.raises(ConflictError):
            await auth_service.register(store, "ALICE@example.com", "pw123")

    @pytest.mark.asyncio
    async def test_concurrent_duplicates_yield_one_user(self, store, auth_service):
        results = await asyncio.gather(
            *(auth_service.register(store, "race@example.com", "pw") for _ in range(3)),
            return_exceptions=True,
        )
        successes = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [(None, "pw"), ("a@b.c", None), ("", "pw"), ("a@b.c", ""), (None, None)],
    )
    async def test_missing_fields_raise_validation_error(self, store, auth_service, email, password):
        with pytest.raises(ValidationError, match="missing email/password"):
            await auth_service.register(store, email, password)

    @pytest.mark.asyncio
    async def test_password_with_nul_byte_is_validation_error(self, store, auth_service):
        with pytest.raises(ValidationError, match="invalid password"):
            await auth_service.register(store, "nul@example.com", "pw\x00x")
        assert not await user_service.email_exists(store, "nul@example.com")

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_error(self, failing_store, auth_service):
        with pytest.raises(InternalError) as exc_info:
            await auth_service.register(failing_store, "x@example.com", "pw")
        # Driver detail stays in context, not in the client-facing message
        assert "disk" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "OperationalError"


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token_with_user_claims(self, store, auth_service):
        user = await auth_service.register(store, "alice@example.com", "pw123")
        result = await auth_service.login(store, "alice@example.com", "pw123")

        assert result.role == "jobseeker"
        claims = auth_service.verify_token(result.token)
        assert claims["id"] == user.id
        assert claims["email"] == "alice@example.com"
        assert claims["role"] == "jobseeker"

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, store, auth_service):
        await auth_service.register(store, "alice@example.com", "pw123")
        result = await auth_service.login(store, "ALICE@Example.com", "pw123")
        assert result.token

    @pytest.mark.asyncio
    async def test_unknown_user(self, store, auth_service):
        with pytest.raises(AuthError, match="no user"):
            await auth_service.login(store, "ghost@example.com", "pw")

    @pytest.mark.asyncio
    async def test_wrong_password(self, store, auth_service):
        await auth_service.register(store, "alice@example.com", "pw123")
        with pytest.raises(AuthError, match="wrong password"):
            await auth_service.login(store, "alice@example.com", "pw124")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [(None, "pw"), ("a@b.c", None), ("", "")])
    async def test_missing_fields(self, store, auth_service, email, password):
        with pytest.raises(ValidationError, match="missing"):
            await auth_service.login(store, email, password)

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_error(self, failing_store, auth_service):
        with pytest.raises(InternalError):
            await auth_service.login(failing_store, "x@example.com", "pw")


class TestVerifyToken:

    @pytest.mark.asyncio
    async def test_token_from_other_app_secret_is_rejected(self, store, auth_service, test_settings):
        await auth_service.register(store, "alice@example.com", "pw123")
        token = (await auth_service.login(store, "alice@example.com", "pw123")).token

        other = AuthService(
            test_settings.model_copy(update={"jwt_secret": "some-other-secret-0123456789abcdefgh"})
        )
        assert other.verify_token(token) is None
        assert auth_service.verify_token(token) is not None

    def test_none_token_is_invalid(self, auth_service):
        assert auth_service.verify_token(None) is None

    def test_expiry_follows_settings(self, test_settings):
        service = AuthService(test_settings.model_copy(update={"jwt_expires_hours": 1}))
        assert service.token_ttl.total_seconds() == 3600
