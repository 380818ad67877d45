"""Unit tests for bearer parsing and token-to-payload verification."""

from datetime import timedelta

import pytest

from app.api.v1.dependencies.auth import (
    MISSING_CLAIMS,
    MISSING_HEADER,
    NOT_BEARER,
    parse_bearer,
    payload_from_token,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
)
from app.infrastructure.security.jwt import create_access_token

TTL = timedelta(minutes=5)
CLAIMS = {
    "user_id": "u1",
    "web_app_role": "USER",
    "company_roles": [{"company_id": "c1", "department_id": None, "role_id": "r1"}],
}


def test_parse_bearer_returns_token() -> None:
    assert parse_bearer("Bearer abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize(
    ("header", "error"),
    [
        (None, MISSING_HEADER),
        ("", MISSING_HEADER),
        ("Basic abc", NOT_BEARER),
        ("Bearer", NOT_BEARER),
        ("Bearer ", NOT_BEARER),
        ("bearer abc", NOT_BEARER),
        ("Bearer a b", NOT_BEARER),
    ],
)
def test_parse_bearer_rejects_malformed(header: str | None, error: str) -> None:
    with pytest.raises(BadRequestException) as exc_info:
        parse_bearer(header)
    assert exc_info.value.error == error


def test_payload_from_valid_token() -> None:
    payload = payload_from_token(create_access_token(CLAIMS, TTL))
    assert payload.user_id == "u1"
    assert payload.has_role("r1")
    assert payload.company_roles[0].department_id is None


def test_empty_membership_list_is_accepted() -> None:
    token = create_access_token({**CLAIMS, "company_roles": []}, TTL)
    assert payload_from_token(token).company_roles == ()


def test_expired_token_is_unauthenticated() -> None:
    token = create_access_token(CLAIMS, timedelta(seconds=-5))
    with pytest.raises(AuthenticationException):
        payload_from_token(token)


def test_expired_token_accepted_without_expiry_check() -> None:
    token = create_access_token(CLAIMS, timedelta(seconds=-5))
    assert payload_from_token(token, verify_exp=False).user_id == "u1"


def test_garbage_token_is_unauthenticated() -> None:
    with pytest.raises(AuthenticationException):
        payload_from_token("not-a-jwt")


@pytest.mark.parametrize("missing", ["user_id", "web_app_role", "company_roles"])
def test_missing_claim_is_forbidden(missing: str) -> None:
    claims = {k: v for k, v in CLAIMS.items() if k != missing}
    with pytest.raises(AuthorizationException) as exc_info:
        payload_from_token(create_access_token(claims, TTL))
    assert exc_info.value.error == MISSING_CLAIMS
