"""
brikvest/dependencies.py

Reusable FastAPI dependencies for admin authentication and role enforcement.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from brikvest.auth import AdminContext, resolve_session, role_at_least
from brikvest.config import IS_DEV
from brikvest.errors import ForbiddenError
from brikvest.models import AdminRole
from brikvest.sessions import SessionStore, get_session_store

logger = logging.getLogger(__name__)

# auto_error=False: a missing header becomes our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def require_admin_role(required: AdminRole) -> Callable:
    """
    FastAPI dependency factory for admin routes.

    Resolves the bearer session and checks the admin's role against
    `required` using the role hierarchy (super_admin > admin > user).

    Usage in routes:
        @router.delete("/{id}")
        def remove(ctx: AdminContext = Depends(require_admin_role(AdminRole.super_admin))):
            ...

    Raises:
        UnauthenticatedError(401): missing or unknown session
        SessionExpiredError(401): session past its expiry
        ForbiddenError(403): role below `required`
    """
    def _check_role(
        token: Optional[str] = Depends(bearer_token),
        store: SessionStore = Depends(get_session_store),
    ) -> AdminContext:
        session = resolve_session(store, token)

        if not role_at_least(session.role, required):
            if IS_DEV:
                logger.debug(
                    "[AUTHZ] Role denied: user_id=%s role=%s required=%s",
                    session.user_id, session.role.value, AdminRole(required).value,
                )
            raise ForbiddenError()

        return AdminContext(
            user_id=session.user_id,
            username=session.username,
            role=session.role,
            session_id=session.session_id,
        )

    return _check_role


require_admin_auth = require_admin_role(AdminRole.admin)
