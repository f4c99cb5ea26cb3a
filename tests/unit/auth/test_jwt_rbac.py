from __future__ import annotations

import pytest

from leadhub.auth.jwt import create_access_token, decode_jwt
from leadhub.auth.rbac import has_scopes, require_scopes
from leadhub.core.dependencies import get_current_user
from leadhub.core.config import get_config
from leadhub.core.exceptions import AuthenticationError, AuthorizationError


def test_access_token_roundtrip_contains_required_claims():
    token = create_access_token(user_id="u-10", role="broker", secret="test-secret", tenant_id="broker-1")
    claims = decode_jwt(token, secret="test-secret")
    assert claims["sub"] == "u-10"
    assert claims["tenant_id"] == "broker-1"
    assert claims["role"] == "broker"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "jti" in claims


def test_tampered_or_expired_tokens_are_rejected():
    token = create_access_token(user_id="u-10", role="broker", secret="test-secret")
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="other-secret")
    with pytest.raises(AuthenticationError):
        decode_jwt("not-a-token", secret="test-secret")

    expired = create_access_token(user_id="u-10", role="broker", secret="test-secret", ttl_minutes=-1)
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(expired, secret="test-secret")


def test_current_user_from_token():
    cfg = get_config()
    token = create_access_token(user_id="admin-1", role="ADMIN", secret=cfg.JWT_SECRET)

    user = get_current_user(token, settings=cfg)

    assert user.user_id == "admin-1"
    assert user.is_admin is True
    assert user.tenant_id is None


def test_imports_are_admin_only():
    assert has_scopes("admin", ["imports.write"])
    require_scopes("broker", ["distribution.write", "leads.assign"])
    with pytest.raises(AuthorizationError, match="imports.write"):
        require_scopes("broker", ["imports.write"])
    with pytest.raises(AuthorizationError):
        require_scopes("viewer", ["distribution.read"])
