"""Integration tests for refresh-token storage on the user row."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.token_service import TokenService
from app.core.config import get_settings
from app.domain.exceptions import PersistenceException
from app.infrastructure.persistence.repositories import (
    CompanyRoleRepository,
    UserRepository,
)
from app.shared.utils.datetime import utc_now


@pytest.fixture
def user_repo(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def tokens(db_session: AsyncSession, user_repo: UserRepository) -> TokenService:
    return TokenService(user_repo, CompanyRoleRepository(db_session), get_settings())


@pytest.fixture
async def user_id(user_repo: UserRepository) -> str:
    user = await user_repo.create_user("Ada", "L", "ada@example.com", "pw123456!")
    return user.id


async def test_issue_persist_validate_invalidate(tokens: TokenService, user_id: str) -> None:
    payload = await tokens.build_payload(user_id)
    pair = tokens.issue_token_pair(payload)
    await tokens.persist_refresh_token(
        user_id, pair.refresh_token, pair.refresh_token_expires_at
    )
    assert await tokens.validate_refresh_token(user_id, pair.refresh_token) is True
    assert await tokens.validate_refresh_token(user_id, "someone-elses") is False

    await tokens.invalidate_refresh_token(user_id)
    assert await tokens.validate_refresh_token(user_id, pair.refresh_token) is False


async def test_expired_stored_token_is_invalid(tokens: TokenService, user_id: str) -> None:
    await tokens.persist_refresh_token(user_id, "tok", utc_now() - timedelta(seconds=1))
    assert await tokens.validate_refresh_token(user_id, "tok") is False


async def test_new_login_replaces_previous_token(tokens: TokenService, user_id: str) -> None:
    first = tokens.issue_refresh_token()
    second = tokens.issue_refresh_token()
    await tokens.persist_refresh_token(user_id, first.token, first.expires_at)
    await tokens.persist_refresh_token(user_id, second.token, second.expires_at)
    assert await tokens.validate_refresh_token(user_id, first.token) is False
    assert await tokens.validate_refresh_token(user_id, second.token) is True


async def test_unknown_user(tokens: TokenService) -> None:
    with pytest.raises(PersistenceException):
        await tokens.persist_refresh_token("ghost", "tok", utc_now())
    assert await tokens.validate_refresh_token("ghost", "tok") is False


async def test_rotation_after_fresh_login_not_needed(
    tokens: TokenService, user_id: str
) -> None:
    assert await tokens.needs_rotation(user_id) is True
    refresh = tokens.issue_refresh_token()
    await tokens.persist_refresh_token(user_id, refresh.token, refresh.expires_at)
    assert await tokens.needs_rotation(user_id) is False
