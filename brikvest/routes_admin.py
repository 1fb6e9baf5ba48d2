"""
brikvest/routes_admin.py

Admin session endpoints and admin-only maintenance actions.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brikvest import auth, seed
from brikvest.auth import AdminContext
from brikvest.db import get_db
from brikvest.dependencies import bearer_token, require_admin_auth
from brikvest.schemas import AdminUserInfo, LoginRequest, LoginResponse, MeResponse, MessageResponse
from brikvest.sessions import SessionStore, get_session_store

router = APIRouter(tags=["admin"])


@router.post("/api/admin/login", response_model=LoginResponse)
def admin_login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """
    Exchange admin credentials for a session id.

    Send the returned sessionId as `Authorization: Bearer <sessionId>`.

    Raises:
        401: unknown user, inactive user or wrong password
        403: valid credentials without an admin role
    """
    session = auth.login(db, store, request.username, request.password)
    return LoginResponse(
        session_id=session.session_id,
        user=AdminUserInfo(id=session.user_id, username=session.username, role=session.role),
        expires_at=session.expires_at,
    )


@router.post("/api/admin/logout", response_model=MessageResponse)
def admin_logout(
    token: Optional[str] = Depends(bearer_token),
    store: SessionStore = Depends(get_session_store),
):
    auth.logout(store, token)
    return MessageResponse(message="Logged out successfully")


@router.get("/api/admin/me", response_model=MeResponse)
def admin_me(ctx: AdminContext = Depends(require_admin_auth)):
    return MeResponse(user=AdminUserInfo(id=ctx.user_id, username=ctx.username, role=ctx.role))


@router.post("/api/seed-properties", response_model=MessageResponse)
def seed_properties(
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    if seed.seed_properties(db):
        return MessageResponse(message="Sample properties created successfully")
    return MessageResponse(message="Properties already exist")
