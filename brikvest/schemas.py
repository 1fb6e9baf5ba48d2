"""
brikvest/schemas.py

Pydantic schemas for request validation and response serialization.

Wire format is camelCase (availableSlots, inviteCode, ...) to match the web
client; attributes are snake_case. Responses are built straight from ORM rows.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from brikvest.models import (
    AdminRole,
    BidStatus,
    GroupStatus,
    PropertyStatus,
    ReservationStatus,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def _normalize_email(v: str) -> str:
    v = v.lower()
    local, _, domain = v.partition("@")
    if not local or "." not in domain:
        raise ValueError("email must be a valid address")
    return v


Email = Annotated[str, Field(min_length=3, max_length=254), AfterValidator(_normalize_email)]


# ========================================================================
# PROPERTIES
# ========================================================================

class PropertyWrite(CamelModel):
    """Create/replace payload for a property (admin).

    The admin supplies slot counts and funding progress directly; nothing is
    recomputed on edit.
    """
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    total_value: int = Field(..., gt=0)
    min_investment: int = Field(..., gt=0)
    projected_return: Decimal = Field(..., ge=0, max_digits=5, decimal_places=2)
    total_slots: int = Field(..., gt=0)
    available_slots: int = Field(..., ge=0)
    funding_progress: int = Field(0, ge=0, le=100)
    image_url: str = Field("", max_length=500)
    status: PropertyStatus = PropertyStatus.active
    badge: Optional[str] = Field(None, max_length=50)
    partnership_document_url: Optional[str] = Field(None, max_length=500)
    partnership_document_name: Optional[str] = Field(None, max_length=200)
    developer_notes: Optional[str] = None
    investment_details: Optional[str] = None

    @field_validator("badge", mode="before")
    @classmethod
    def blank_badge_is_none(cls, v):
        # The admin form sends "none" for no badge
        if isinstance(v, str) and v.strip().lower() in ("", "none"):
            return None
        return v

    @model_validator(mode="after")
    def check_slot_bounds(self):
        if self.available_slots > self.total_slots:
            raise ValueError("availableSlots must not exceed totalSlots")
        return self


class PropertyResponse(CamelModel):
    id: int
    name: str
    location: str
    description: str
    total_value: int
    min_investment: int
    projected_return: Decimal
    total_slots: int
    available_slots: int
    funding_progress: int
    image_url: str
    status: PropertyStatus
    badge: Optional[str] = None
    partnership_document_url: Optional[str] = None
    partnership_document_name: Optional[str] = None
    developer_notes: Optional[str] = None
    investment_details: Optional[str] = None
    created_at: datetime


# ========================================================================
# RESERVATIONS
# ========================================================================

class ReservationCreate(CamelModel):
    property_id: int = Field(..., gt=0)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: Email
    phone: str = Field(..., min_length=1, max_length=40)
    units: int = Field(..., gt=0)
    referral_code: Optional[str] = Field(None, max_length=50)

    @field_validator("referral_code")
    @classmethod
    def blank_referral_is_none(cls, v):
        return v or None


class ReservationResponse(CamelModel):
    id: int
    property_id: int
    full_name: str
    email: str
    phone: str
    units: int
    referral_code: Optional[str] = None
    status: ReservationStatus
    created_at: datetime


class InvestorSummary(CamelModel):
    email: str
    total_invested: int = 0
    active_investments: int = 0
    total_units: int = 0
    expected_returns: Decimal = Decimal("0")


# ========================================================================
# DEVELOPER BIDS
# ========================================================================

class DeveloperBidCreate(CamelModel):
    developer_name: str = Field(..., min_length=1, max_length=200)
    company_name: str = Field(..., min_length=1, max_length=200)
    email: Email
    phone: str = Field(..., min_length=1, max_length=40)
    estimated_cost: int = Field(..., gt=0)
    cost_currency: str = Field("NGN", min_length=3, max_length=3)
    description: str = Field(..., min_length=1)
    timeline: int = Field(..., gt=0, description="Months")
    past_project_link: Optional[str] = Field(None, max_length=500)
    past_project_file: Optional[str] = Field(None, max_length=500)
    why_selected: str = Field(..., min_length=1)

    @field_validator("cost_currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper()


class DeveloperBidResponse(CamelModel):
    id: int
    developer_name: str
    company_name: str
    email: str
    phone: str
    estimated_cost: int
    cost_currency: str
    description: str
    timeline: int
    past_project_link: Optional[str] = None
    past_project_file: Optional[str] = None
    why_selected: str
    status: BidStatus
    created_at: datetime


# ========================================================================
# INVESTMENT GROUPS
# ========================================================================

class GroupCreate(CamelModel):
    property_id: Optional[int] = Field(None, gt=0)
    group_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    leader_name: str = Field(..., min_length=1, max_length=200)
    leader_email: Email
    leader_phone: str = Field("", max_length=40)
    target_amount: int = Field(..., gt=0)
    target_units: int = Field(1, gt=0)
    max_members: int = Field(10, ge=1, le=100)
    is_public: bool = True


class GroupJoin(CamelModel):
    invite_code: str = Field(..., min_length=1, max_length=32)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: Email
    phone: str = Field("", max_length=40)
    pledged_amount: int = Field(..., gt=0)


class ContributionCreate(CamelModel):
    member_id: int = Field(..., gt=0)
    amount: int = Field(..., gt=0)
    note: Optional[str] = Field(None, max_length=500)


class GroupStatusUpdate(CamelModel):
    status: GroupStatus


class GroupResponse(CamelModel):
    id: int
    property_id: Optional[int] = None
    group_name: str
    description: str
    leader_name: str
    target_amount: int
    target_units: int
    current_amount: int
    max_members: int
    current_members: int
    # None for private groups outside the create, join and admin responses
    invite_code: Optional[str] = None
    status: GroupStatus
    is_public: bool
    expires_at: datetime
    created_at: datetime


class GroupMemberResponse(CamelModel):
    id: int
    group_id: int
    full_name: str
    pledged_amount: int
    contributed_amount: int
    is_leader: bool
    joined_at: datetime


class ContributionResponse(CamelModel):
    id: int
    group_id: int
    member_id: int
    amount: int
    note: Optional[str] = None
    created_at: datetime


class GroupDetailResponse(GroupResponse):
    members: List[GroupMemberResponse] = Field(default_factory=list)
    contributions: List[ContributionResponse] = Field(default_factory=list)


class GroupJoinResponse(CamelModel):
    group: GroupResponse
    member: GroupMemberResponse


class ContributionResult(CamelModel):
    contribution: ContributionResponse
    group: GroupResponse
    member: GroupMemberResponse


# ========================================================================
# ADMIN AUTH
# ========================================================================

class LoginRequest(CamelModel):
    # Passwords are compared byte for byte
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)

    @field_validator("username")
    @classmethod
    def trim_username(cls, v):
        return v.strip()


class AdminUserInfo(CamelModel):
    id: int
    username: str
    role: AdminRole


class LoginResponse(CamelModel):
    session_id: str
    user: AdminUserInfo
    expires_at: datetime


class MeResponse(CamelModel):
    user: AdminUserInfo


# ========================================================================
# MISC
# ========================================================================

class MessageResponse(CamelModel):
    message: str


class UploadResponse(CamelModel):
    url: str
    id: str
    original_name: str
