"""
brikvest/routes_groups.py

Investment group endpoints.

- Creating, listing, viewing and joining groups is public
- Private groups are left out of the public listing and their invite code
  is only returned to the leader on create, to members on join, and to admins
- Recording contributions and changing status require an admin session
- Member contact details never appear in responses
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from brikvest import groups
from brikvest.auth import AdminContext
from brikvest.db import get_db
from brikvest.dependencies import require_admin_auth
from brikvest.schemas import (
    ContributionCreate,
    ContributionResponse,
    ContributionResult,
    GroupCreate,
    GroupDetailResponse,
    GroupJoin,
    GroupJoinResponse,
    GroupMemberResponse,
    GroupResponse,
    GroupStatusUpdate,
)

router = APIRouter(
    prefix="/api/investment-groups",
    tags=["investment-groups"],
)


@router.post("", response_model=GroupDetailResponse, status_code=201)
def create_group(request: GroupCreate, db: Session = Depends(get_db)):
    """
    Start a group; the caller becomes its leader and first member.

    The response carries the invite code to share with prospective members.
    """
    group, _leader = groups.create_group(db, request)
    return groups.get_group(db, group.id)


@router.get("", response_model=List[GroupResponse])
def list_groups(db: Session = Depends(get_db)):
    """Public groups only; private groups are reached through their invite code."""
    return groups.list_groups(db)


@router.get("/all", response_model=List[GroupResponse])
def list_all_groups(
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return groups.list_groups(db, public_only=False)


# Declared before /{group_id} so "join" and "all" are never parsed as ids
@router.post("/join", response_model=GroupJoinResponse, status_code=201)
def join_group(request: GroupJoin, db: Session = Depends(get_db)):
    """
    Join a group by invite code.

    Raises:
        404: unknown, malformed or expired invite code
        400: group full or no longer recruiting
    """
    group, member = groups.join_group(db, request)
    return GroupJoinResponse(
        group=GroupResponse.model_validate(group),
        member=GroupMemberResponse.model_validate(member),
    )


@router.get("/{group_id}", response_model=GroupDetailResponse)
def get_group(
    group_id: int = Path(..., description="Group ID"),
    db: Session = Depends(get_db),
):
    detail = GroupDetailResponse.model_validate(groups.get_group(db, group_id))
    if not detail.is_public:
        detail = detail.model_copy(update={"invite_code": None})
    return detail


@router.post("/{group_id}/contributions", response_model=ContributionResult, status_code=201)
def add_contribution(
    request: ContributionCreate,
    group_id: int = Path(..., description="Group ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """Record a member's payment (admin). Moves both running totals."""
    contribution, group, member = groups.add_contribution(
        db, group_id, request.member_id, request.amount, request.note
    )
    return ContributionResult(
        contribution=ContributionResponse.model_validate(contribution),
        group=GroupResponse.model_validate(group),
        member=GroupMemberResponse.model_validate(member),
    )


@router.patch("/{group_id}/status", response_model=GroupResponse)
def update_group_status(
    request: GroupStatusUpdate,
    group_id: int = Path(..., description="Group ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return groups.transition_group_status(db, group_id, request.status)
