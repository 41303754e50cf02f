# -*- coding: utf-8 -*-
"""
Dependencia require_internal_service_token sin pasar por HTTP.
"""
import pytest
from fastapi import HTTPException
from pydantic import SecretStr

from app.shared import internal_auth
from app.shared.config.settings_testing import EnvTestingSettings

pytestmark = pytest.mark.asyncio


@pytest.fixture
def token_settings(monkeypatch):
    def _use(token):
        settings = EnvTestingSettings(internal_service_token=SecretStr(token) if token else None)
        monkeypatch.setattr(internal_auth, "get_settings", lambda: settings)
    return _use


async def test_valid_bearer_token(token_settings):
    token_settings("s3cret")
    assert await internal_auth.require_internal_service_token("Bearer s3cret") is True


async def test_scheme_is_case_insensitive(token_settings):
    token_settings("s3cret")
    assert await internal_auth.require_internal_service_token("bearer s3cret") is True


@pytest.mark.parametrize(
    "header,expected_status",
    [
        (None, 401),
        ("", 401),
        ("s3cret", 401),
        ("Basic s3cret", 401),
        ("Bearer a b", 401),
        ("Bearer wrong", 403),
    ],
)
async def test_rejected_headers(token_settings, header, expected_status):
    token_settings("s3cret")
    with pytest.raises(HTTPException) as ei:
        await internal_auth.require_internal_service_token(header)
    assert ei.value.status_code == expected_status


async def test_unconfigured_token_is_server_error(token_settings):
    token_settings(None)
    with pytest.raises(HTTPException) as ei:
        await internal_auth.require_internal_service_token("Bearer anything")
    assert ei.value.status_code == 500
