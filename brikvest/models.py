"""
ORM models and status enumerations.

All timestamps are naive UTC (see utcnow). Money columns are whole Naira
amounts stored as BIGINT.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from brikvest.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_column(enum_cls, default):
    return Column(
        SAEnum(
            enum_cls,
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
        default=default,
    )


# Enums
class PropertyStatus(str, Enum):
    active = "active"
    coming_soon = "coming_soon"
    funded = "funded"
    closed = "closed"


class ReservationStatus(str, Enum):
    reserved = "reserved"
    confirmed = "confirmed"


class BidStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class GroupStatus(str, Enum):
    recruiting = "recruiting"
    funded = "funded"
    confirmed = "confirmed"
    closed = "closed"


class AdminRole(str, Enum):
    user = "user"
    admin = "admin"
    super_admin = "super_admin"


# Models
class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    total_value = Column(BigInteger, nullable=False)
    min_investment = Column(BigInteger, nullable=False)
    projected_return = Column(Numeric(5, 2), nullable=False)
    total_slots = Column(Integer, nullable=False)
    available_slots = Column(Integer, nullable=False)
    funding_progress = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=False, default="")
    status = _enum_column(PropertyStatus, PropertyStatus.active)
    badge = Column(String(50))  # e.g. 'partnered', 'verified'
    partnership_document_url = Column(String(500))
    partnership_document_name = Column(String(200))
    developer_notes = Column(Text)
    investment_details = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    reservations = relationship(
        "InvestmentReservation",
        back_populates="property",
        cascade="all, delete",
        passive_deletes=True,
    )
    groups = relationship(
        "InvestmentGroup",
        back_populates="property",
        cascade="all, delete",
        passive_deletes=True,
    )


class InvestmentReservation(Base):
    __tablename__ = "investment_reservations"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(254), nullable=False, index=True)
    phone = Column(String(40), nullable=False)
    units = Column(Integer, nullable=False)
    referral_code = Column(String(50))
    status = _enum_column(ReservationStatus, ReservationStatus.reserved)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    property = relationship("Property", back_populates="reservations")


class DeveloperBid(Base):
    __tablename__ = "developer_bids"

    id = Column(Integer, primary_key=True, index=True)
    developer_name = Column(String(200), nullable=False)
    company_name = Column(String(200), nullable=False)
    email = Column(String(254), nullable=False)
    phone = Column(String(40), nullable=False)
    estimated_cost = Column(BigInteger, nullable=False)
    cost_currency = Column(String(3), nullable=False, default="NGN")
    description = Column(Text, nullable=False)
    timeline = Column(Integer, nullable=False)  # months
    past_project_link = Column(String(500))
    past_project_file = Column(String(500))
    why_selected = Column(Text, nullable=False)
    status = _enum_column(BidStatus, BidStatus.pending)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class InvestmentGroup(Base):
    __tablename__ = "investment_groups"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), index=True)
    group_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    leader_name = Column(String(200), nullable=False)
    leader_email = Column(String(254), nullable=False)
    leader_phone = Column(String(40), nullable=False, default="")
    target_amount = Column(BigInteger, nullable=False)
    target_units = Column(Integer, nullable=False, default=1)
    current_amount = Column(BigInteger, nullable=False, default=0)
    max_members = Column(Integer, nullable=False, default=10)
    current_members = Column(Integer, nullable=False, default=1)
    invite_code = Column(String(16), nullable=False, unique=True, index=True)
    status = _enum_column(GroupStatus, GroupStatus.recruiting)
    is_public = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    property = relationship("Property", back_populates="groups")
    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete",
        passive_deletes=True,
        order_by="GroupMember.id",
    )
    contributions = relationship(
        "GroupContribution",
        back_populates="group",
        cascade="all, delete",
        passive_deletes=True,
        order_by="GroupContribution.id",
    )


class GroupMember(Base):
    __tablename__ = "group_members"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("investment_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(254), nullable=False)
    phone = Column(String(40), nullable=False, default="")
    pledged_amount = Column(BigInteger, nullable=False, default=0)
    contributed_amount = Column(BigInteger, nullable=False, default=0)
    is_leader = Column(Boolean, nullable=False, default=False)
    joined_at = Column(DateTime, nullable=False, default=utcnow)

    group = relationship("InvestmentGroup", back_populates="members")
    contributions = relationship("GroupContribution", back_populates="member", passive_deletes=True)


class GroupContribution(Base):
    __tablename__ = "group_contributions"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("investment_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("group_members.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    note = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=utcnow)

    group = relationship("InvestmentGroup", back_populates="contributions")
    member = relationship("GroupMember", back_populates="contributions")


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(256), nullable=False)
    role = _enum_column(AdminRole, AdminRole.user)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utcnow)
