"""
brikvest/auth.py

Admin session guard primitives: credential check and session issue/revoke.
The FastAPI dependencies that enforce them live in brikvest.dependencies.

Contains:
- hash_password / verify_password: salted hashes via werkzeug.security
- ROLE_LEVELS / role_at_least: admin role hierarchy
- login / logout / resolve_session
- AdminContext: identity attached to an authorized request

Session ids are opaque random tokens sent as `Authorization: Bearer <id>`.
They are never logged in full.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from brikvest.config import ADMIN_SESSION_HOURS
from brikvest.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    SessionExpiredError,
    UnauthenticatedError,
)
from brikvest.models import AdminRole, AdminUser
from brikvest.sessions import AdminSession, SessionStore, mask_session_id, new_session_id

logger = logging.getLogger(__name__)


# ============================================================================
# Passwords
# ============================================================================

def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


# ============================================================================
# Role hierarchy
# ============================================================================

ROLE_LEVELS = {
    AdminRole.user: 0,
    AdminRole.admin: 1,
    AdminRole.super_admin: 2,
}


def role_at_least(role, required) -> bool:
    """
    True when `role` ranks at or above `required`.

    Unknown roles rank below everything.
    """
    try:
        have = ROLE_LEVELS[AdminRole(role)]
        need = ROLE_LEVELS[AdminRole(required)]
    except ValueError:
        return False
    return have >= need


# ============================================================================
# Sessions
# ============================================================================

class AdminContext(BaseModel):
    """Identity of the admin behind an authorized request."""
    user_id: int
    username: str
    role: AdminRole
    session_id: str


def login(db: Session, store: SessionStore, username: str, password: str) -> AdminSession:
    """
    Verify credentials and open a session.

    Missing, inactive and wrong-password users all get the same 401 so the
    response does not reveal which usernames exist.

    Raises:
        InvalidCredentialsError(401): bad username or password
        ForbiddenError(403): valid credentials, role below admin
    """
    user = db.scalars(select(AdminUser).where(AdminUser.username == username)).first()
    if user is None or not user.is_active or not verify_password(user.password_hash, password):
        logger.info("[AUTH] Failed login for username=%r", username)
        raise InvalidCredentialsError()

    if not role_at_least(user.role, AdminRole.admin):
        logger.info("[AUTH] Login refused, role=%s for username=%r", AdminRole(user.role).value, username)
        raise ForbiddenError("Admin access required")

    now = store.now()
    session = AdminSession(
        session_id=new_session_id(),
        user_id=user.id,
        username=user.username,
        role=AdminRole(user.role),
        expires_at=now + timedelta(hours=ADMIN_SESSION_HOURS),
    )
    store.save(session)

    user.last_login = now
    db.commit()

    logger.info("[AUTH] Admin login user_id=%s session=%s", user.id, mask_session_id(session.session_id))
    return session


def logout(store: SessionStore, session_id: Optional[str]) -> None:
    """Revoke a session. Unknown or missing ids are not an error."""
    if session_id:
        store.delete(session_id)
        logger.info("[AUTH] Logout session=%s", mask_session_id(session_id))


def resolve_session(store: SessionStore, session_id: Optional[str]) -> AdminSession:
    """
    Look up a live session.

    Raises:
        UnauthenticatedError(401): no id or unknown id
        SessionExpiredError(401): past expiry (the entry is evicted)
    """
    if not session_id:
        raise UnauthenticatedError()

    session = store.get(session_id)
    if session is None:
        raise UnauthenticatedError("Invalid session")

    if session.expires_at <= store.now():
        store.delete(session_id)
        logger.info("[AUTH] Expired session=%s evicted", mask_session_id(session_id))
        raise SessionExpiredError()

    return session
