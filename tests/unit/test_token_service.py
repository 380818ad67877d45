"""Unit tests for TokenService with mocked repositories."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.auth import AuthPayload
from app.application.dtos.user import CompanyRoleResult, StoredRefreshToken, UserResult
from app.application.services.token_service import TokenService
from app.core.config import get_settings
from app.domain.exceptions import (
    ConfigurationException,
    InvalidArgumentException,
    PersistenceException,
    ResourceNotFoundException,
)
from app.infrastructure.security.jwt import verify_token
from app.shared.utils.datetime import utc_now

PAYLOAD = AuthPayload(
    user_id="u1",
    web_app_role="USER",
    company_roles=(CompanyRoleResult("c1", "d1", "r1"),),
)


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def company_role_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(user_repo: AsyncMock, company_role_repo: AsyncMock) -> TokenService:
    return TokenService(user_repo, company_role_repo, get_settings())


def _stored(token: str | None, expires_in: timedelta | None) -> StoredRefreshToken:
    expires_at = utc_now() + expires_in if expires_in is not None else None
    return StoredRefreshToken(token=token, expires_at=expires_at)


def test_issue_token_pair_embeds_snapshot(service: TokenService) -> None:
    pair = service.issue_token_pair(PAYLOAD)
    claims = verify_token(pair.access_token)
    assert claims["user_id"] == "u1"
    assert claims["web_app_role"] == "USER"
    assert claims["company_roles"] == [
        {"company_id": "c1", "department_id": "d1", "role_id": "r1"}
    ]
    assert len(pair.refresh_token) == 64
    int(pair.refresh_token, 16)
    assert pair.refresh_token_expires_at > utc_now()


def test_issue_token_pair_requires_payload(service: TokenService) -> None:
    with pytest.raises(InvalidArgumentException):
        service.issue_token_pair(None)


def test_refresh_tokens_are_unique(service: TokenService) -> None:
    assert service.issue_refresh_token().token != service.issue_refresh_token().token


def test_missing_access_ttl_is_configuration_error(
    user_repo: AsyncMock, company_role_repo: AsyncMock
) -> None:
    settings = get_settings().model_copy(update={"access_token_expire_seconds": None})
    service = TokenService(user_repo, company_role_repo, settings)
    with pytest.raises(ConfigurationException):
        service.issue_access_token(PAYLOAD)


def test_missing_refresh_ttl_is_configuration_error(
    user_repo: AsyncMock, company_role_repo: AsyncMock
) -> None:
    settings = get_settings().model_copy(update={"refresh_token_expire_seconds": None})
    service = TokenService(user_repo, company_role_repo, settings)
    with pytest.raises(ConfigurationException):
        service.issue_refresh_token()


async def test_persist_refresh_token_writes_user_row(
    service: TokenService, user_repo: AsyncMock
) -> None:
    user_repo.set_refresh_token.return_value = 1
    expires_at = utc_now() + timedelta(days=1)
    await service.persist_refresh_token("u1", "tok", expires_at)
    user_repo.set_refresh_token.assert_awaited_once_with("u1", "tok", expires_at)


async def test_persist_refresh_token_errors(
    service: TokenService, user_repo: AsyncMock
) -> None:
    with pytest.raises(PersistenceException, match="One of the arguments is missing."):
        await service.persist_refresh_token("u1", "", utc_now())
    user_repo.set_refresh_token.return_value = 0
    with pytest.raises(PersistenceException, match="Saving refresh token has failed."):
        await service.persist_refresh_token("u1", "tok", utc_now())


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        (_stored("tok", timedelta(days=1)), True),
        (_stored("other", timedelta(days=1)), False),
        (_stored("tok", timedelta(seconds=-1)), False),
        (_stored(None, None), False),
        (None, False),
    ],
)
async def test_validate_refresh_token_truth_table(
    service: TokenService, user_repo: AsyncMock, stored, expected: bool
) -> None:
    user_repo.get_refresh_token.return_value = stored
    assert await service.validate_refresh_token("u1", "tok") is expected


async def test_validate_refresh_token_requires_arguments(service: TokenService) -> None:
    with pytest.raises(InvalidArgumentException):
        await service.validate_refresh_token("", "tok")
    with pytest.raises(InvalidArgumentException):
        await service.validate_refresh_token("u1", "")


async def test_invalidate_refresh_token(service: TokenService, user_repo: AsyncMock) -> None:
    user_repo.set_refresh_token.return_value = 1
    await service.invalidate_refresh_token("u1")
    user_repo.set_refresh_token.assert_awaited_once_with("u1", None, None)

    user_repo.set_refresh_token.return_value = 0
    with pytest.raises(PersistenceException):
        await service.invalidate_refresh_token("ghost")


async def test_build_payload_reads_memberships(
    service: TokenService, user_repo: AsyncMock, company_role_repo: AsyncMock
) -> None:
    user_repo.get_result.return_value = UserResult(
        id="u1",
        first_name="A",
        last_name="B",
        email="a@example.com",
        web_app_role="USER",
        image="default_user_image.png",
    )
    company_role_repo.list_for_user.return_value = [CompanyRoleResult("c1", None, "r9")]
    payload = await service.build_payload("u1")
    assert payload.user_id == "u1"
    assert payload.has_role("r9")

    user_repo.get_result.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.build_payload("ghost")


async def test_needs_rotation_uses_buffer(service: TokenService, user_repo: AsyncMock) -> None:
    buffer = get_settings().refresh_token_rotation_buffer_seconds
    user_repo.get_refresh_token.return_value = _stored(
        "tok", timedelta(seconds=buffer * 2)
    )
    assert await service.needs_rotation("u1") is False
    user_repo.get_refresh_token.return_value = _stored(
        "tok", timedelta(seconds=buffer // 2)
    )
    assert await service.needs_rotation("u1") is True


async def test_rotate_refresh_token_persists_new_value(
    service: TokenService, user_repo: AsyncMock
) -> None:
    user_repo.set_refresh_token.return_value = 1
    rotated = await service.rotate_refresh_token("u1")
    args = user_repo.set_refresh_token.await_args.args
    assert args == ("u1", rotated.token, rotated.expires_at)
