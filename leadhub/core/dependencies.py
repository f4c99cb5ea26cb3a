"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from leadhub.auth.jwt import decode_jwt
from leadhub.core.config import Config, get_config
from leadhub.core.enums import UserRole
from leadhub.core.exceptions import AuthenticationError
from leadhub.database.db import get_db


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str
    tenant_id: str | None
    permissions_version: int
    claims: dict[str, Any]

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve current user from a bearer token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    if claims.get("token_use", "access") != "access":
        raise AuthenticationError("Token is not an access token.")

    try:
        tenant_id = claims.get("tenant_id")
        return CurrentUser(
            user_id=str(claims["sub"]),
            role=str(claims["role"]).lower(),
            tenant_id=str(tenant_id) if tenant_id is not None else None,
            permissions_version=int(claims.get("permissions_version", 1)),
            claims=claims,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid auth claims.") from exc
