"""Bearer-token authentication.

Tokens are issued by the external auth service and signed with a shared
secret; this module only verifies them and extracts who is calling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from palette_oms.infrastructure.config import Settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


class AuthError(Exception):
    """Missing or invalid bearer token."""


class ForbiddenError(Exception):
    """Authenticated, but not allowed to do this."""


@dataclass(frozen=True)
class Identity:
    user_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def _role_from_claims(claims: dict[str, Any]) -> Optional[str]:
    app_metadata = claims.get("app_metadata") or {}
    user_metadata = claims.get("user_metadata") or {}
    return app_metadata.get("role") or user_metadata.get("type") or claims.get("role")


def decode_token(token: str, settings: Settings) -> Identity:
    """Verify *token* and return the caller's identity.

    Raises AuthError for any signature, expiry or claim problem.
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthError("Invalid token") from e

    user_id = claims.get("sub")
    if not user_id:
        raise AuthError("Invalid token")
    return Identity(user_id=str(user_id), role=_role_from_claims(claims))


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    if credentials is None:
        raise AuthError("Unauthorized")
    return decode_token(credentials.credentials, request.app.state.settings)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise ForbiddenError("Only administrators can delete orders")
    return identity
