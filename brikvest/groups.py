"""
brikvest/groups.py

Group pool accumulator: a leader sets a funding target, members join with a
shareable invite code and pledge amounts, and recorded contributions
accumulate toward the target.

- A pledge is a stated intent and never moves current_amount.
- A contribution is an actual payment and moves both the member's
  contributed_amount and the group's current_amount in the same transaction,
  using SQL-side increments so concurrent contributions cannot lose updates.
- Member slots are claimed with a conditional increment of current_members,
  so a group never exceeds max_members.
- Status changes are manual (admin) and follow GROUP_TRANSITIONS; reaching
  the target does not move the status.
"""

from __future__ import annotations

import logging
import re
import secrets
import string
from datetime import timedelta
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from brikvest import ledger
from brikvest.config import GROUP_EXPIRY_DAYS, INVITE_CODE_ATTEMPTS, INVITE_CODE_LENGTH
from brikvest.errors import (
    GroupClosedError,
    InternalError,
    InvalidStatusTransitionError,
    NotFoundError,
    OvercommitError,
    ValidationError,
)
from brikvest.models import (
    GroupContribution,
    GroupMember,
    GroupStatus,
    InvestmentGroup,
    utcnow,
)
from brikvest.schemas import GroupCreate, GroupJoin

logger = logging.getLogger(__name__)

INVITE_ALPHABET = string.digits + string.ascii_uppercase  # base-36, uppercase

GROUP_TRANSITIONS: Dict[GroupStatus, FrozenSet[GroupStatus]] = {
    GroupStatus.recruiting: frozenset({GroupStatus.funded, GroupStatus.closed}),
    GroupStatus.funded: frozenset({GroupStatus.confirmed, GroupStatus.closed}),
    GroupStatus.confirmed: frozenset({GroupStatus.closed}),
    GroupStatus.closed: frozenset(),
}

# Contributions stop once a group is closed
CONTRIBUTION_STATUSES = frozenset({GroupStatus.recruiting, GroupStatus.funded, GroupStatus.confirmed})


def generate_invite_code(length: int = INVITE_CODE_LENGTH) -> str:
    return "".join(secrets.choice(INVITE_ALPHABET) for _ in range(length))


def normalize_invite_code(code: str) -> Optional[str]:
    """Uppercase and strip a user-typed code; None when it cannot be a valid code."""
    code = (code or "").strip().upper()
    if not re.fullmatch(rf"[0-9A-Z]{{{INVITE_CODE_LENGTH}}}", code):
        return None
    return code


def can_transition(current: GroupStatus, new: GroupStatus) -> bool:
    return new in GROUP_TRANSITIONS.get(current, frozenset())


def _invite_code_taken(db: Session, code: str) -> bool:
    return db.scalar(select(InvestmentGroup.id).where(InvestmentGroup.invite_code == code)) is not None


# ---------------------------------------------------------
# Reads
# ---------------------------------------------------------
def list_groups(db: Session, public_only: bool = True) -> List[InvestmentGroup]:
    """Newest first. Private groups are only reachable through their invite code unless public_only is False."""
    stmt = select(InvestmentGroup).order_by(InvestmentGroup.created_at.desc(), InvestmentGroup.id.desc())
    if public_only:
        stmt = stmt.where(InvestmentGroup.is_public.is_(True))
    return list(db.scalars(stmt))


def get_group(db: Session, group_id: int) -> InvestmentGroup:
    stmt = (
        select(InvestmentGroup)
        .where(InvestmentGroup.id == group_id)
        .options(selectinload(InvestmentGroup.members), selectinload(InvestmentGroup.contributions))
    )
    group = db.scalars(stmt).first()
    if group is None:
        raise NotFoundError("Investment group not found")
    return group


def find_group_by_code(db: Session, invite_code: str) -> InvestmentGroup:
    """Look up a live group by invite code; unknown, malformed and expired codes all 404."""
    code = normalize_invite_code(invite_code)
    if code is None:
        raise NotFoundError("Invalid or expired invite code")

    group = db.scalars(select(InvestmentGroup).where(InvestmentGroup.invite_code == code)).first()
    if group is None or group.expires_at <= utcnow():
        raise NotFoundError("Invalid or expired invite code")
    return group


# ---------------------------------------------------------
# Writes
# ---------------------------------------------------------
def create_group(db: Session, data: GroupCreate) -> Tuple[InvestmentGroup, GroupMember]:
    """
    Create a group and enroll its leader as the first member.

    The leader's pledge is one equal share: target_amount // target_units.
    Invite codes are retried on collision with an existing group; any other
    integrity error propagates.
    """
    if data.property_id is not None:
        ledger.get_property(db, data.property_id)

    leader_pledge = data.target_amount // data.target_units

    for attempt in range(1, INVITE_CODE_ATTEMPTS + 1):
        now = utcnow()
        code = generate_invite_code()
        group = InvestmentGroup(
            property_id=data.property_id,
            group_name=data.group_name,
            description=data.description,
            leader_name=data.leader_name,
            leader_email=data.leader_email,
            leader_phone=data.leader_phone,
            target_amount=data.target_amount,
            target_units=data.target_units,
            current_amount=0,
            max_members=data.max_members,
            current_members=1,
            invite_code=code,
            status=GroupStatus.recruiting,
            is_public=data.is_public,
            expires_at=now + timedelta(days=GROUP_EXPIRY_DAYS),
            created_at=now,
        )
        leader = GroupMember(
            full_name=data.leader_name,
            email=data.leader_email,
            phone=data.leader_phone,
            pledged_amount=leader_pledge,
            contributed_amount=0,
            is_leader=True,
            joined_at=now,
        )
        group.members.append(leader)
        db.add(group)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if not _invite_code_taken(db, code):
                raise
            logger.warning("[GROUPS] Invite code collision (attempt %s/%s)", attempt, INVITE_CODE_ATTEMPTS)
            continue

        db.refresh(group)
        db.refresh(leader)
        logger.info("[GROUPS] Created group_id=%s code=%s target=%s", group.id, group.invite_code, group.target_amount)
        return group, leader

    raise InternalError("Could not allocate a unique invite code")


def join_group(db: Session, data: GroupJoin) -> Tuple[InvestmentGroup, GroupMember]:
    """
    Add a member to the group behind an invite code.

    Nothing is written when the code is unknown, malformed or expired, when
    the group has stopped recruiting, or when it is already full.
    """
    group = find_group_by_code(db, data.invite_code)
    if group.status != GroupStatus.recruiting:
        raise GroupClosedError("Group is no longer recruiting")

    try:
        result = db.execute(
            update(InvestmentGroup)
            .where(
                InvestmentGroup.id == group.id,
                InvestmentGroup.status == GroupStatus.recruiting,
                InvestmentGroup.current_members < InvestmentGroup.max_members,
            )
            .values(current_members=InvestmentGroup.current_members + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise OvercommitError()

        member = GroupMember(
            group_id=group.id,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            pledged_amount=data.pledged_amount,
            contributed_amount=0,
            is_leader=False,
        )
        db.add(member)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(group)
    db.refresh(member)
    logger.info("[GROUPS] member_id=%s joined group_id=%s (%s/%s)", member.id, group.id, group.current_members, group.max_members)
    return group, member


def add_contribution(
    db: Session,
    group_id: int,
    member_id: int,
    amount: int,
    note: Optional[str] = None,
) -> Tuple[GroupContribution, InvestmentGroup, GroupMember]:
    """Record a payment from a member and roll it into both running totals."""
    if amount <= 0:
        raise ValidationError("amount must be greater than zero")

    group = db.get(InvestmentGroup, group_id)
    if group is None:
        raise NotFoundError("Investment group not found")
    member = db.get(GroupMember, member_id)
    if member is None or member.group_id != group_id:
        raise NotFoundError("Group member not found")
    if group.status not in CONTRIBUTION_STATUSES:
        raise GroupClosedError()

    try:
        contribution = GroupContribution(group_id=group_id, member_id=member_id, amount=amount, note=note)
        db.add(contribution)
        db.execute(
            update(GroupMember)
            .where(GroupMember.id == member_id)
            .values(contributed_amount=GroupMember.contributed_amount + amount)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            update(InvestmentGroup)
            .where(InvestmentGroup.id == group_id)
            .values(current_amount=InvestmentGroup.current_amount + amount)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(contribution)
    db.refresh(member)
    db.refresh(group)
    logger.info(
        "[GROUPS] contribution_id=%s group_id=%s amount=%s -> current=%s/%s",
        contribution.id, group_id, amount, group.current_amount, group.target_amount,
    )
    return contribution, group, member


def transition_group_status(db: Session, group_id: int, new_status: GroupStatus) -> InvestmentGroup:
    group = db.get(InvestmentGroup, group_id)
    if group is None:
        raise NotFoundError("Investment group not found")

    current = GroupStatus(group.status)
    if not can_transition(current, new_status):
        raise InvalidStatusTransitionError(
            f"Cannot move group from {current.value} to {new_status.value}"
        )

    group.status = new_status
    db.commit()
    db.refresh(group)
    logger.info("[GROUPS] group_id=%s status %s -> %s", group_id, current.value, new_status.value)
    return group
