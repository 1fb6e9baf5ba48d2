"""
brikvest/reservations.py

Reservation recorder: validates an investor's claim on N slots of a property,
records it and takes the slots from the ledger in one transaction.

There is no cancel or modify path; a reservation is immutable once created.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from brikvest import ledger
from brikvest.errors import InsufficientSlotsError
from brikvest.models import InvestmentReservation, Property, ReservationStatus
from brikvest.schemas import InvestorSummary, ReservationCreate

logger = logging.getLogger(__name__)


def create_reservation(db: Session, data: ReservationCreate) -> InvestmentReservation:
    """
    Record a reservation and decrement the property's available slots.

    The insert and the slot decrement commit together; any failure rolls both
    back, so a reservation row never exists without its slots being taken.
    """
    prop = ledger.get_property(db, data.property_id)
    # Re-check against current state; the client may have rendered stale counts
    if data.units > prop.available_slots:
        raise InsufficientSlotsError()

    reservation = InvestmentReservation(
        property_id=prop.id,
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
        units=data.units,
        referral_code=data.referral_code,
        status=ReservationStatus.reserved,
    )
    try:
        db.add(reservation)
        db.flush()
        ledger.reserve_slots(db, prop.id, data.units)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(reservation)
    logger.info(
        "[RESERVATIONS] reservation_id=%s property_id=%s units=%s",
        reservation.id, reservation.property_id, reservation.units,
    )
    return reservation


def list_reservations_by_email(db: Session, email: str) -> List[InvestmentReservation]:
    stmt = (
        select(InvestmentReservation)
        .where(InvestmentReservation.email == email.strip().lower())
        .order_by(InvestmentReservation.created_at.desc(), InvestmentReservation.id.desc())
    )
    return list(db.scalars(stmt))


def list_all_reservations(db: Session) -> List[InvestmentReservation]:
    stmt = select(InvestmentReservation).order_by(
        InvestmentReservation.created_at.desc(), InvestmentReservation.id.desc()
    )
    return list(db.scalars(stmt))


def list_reservations_for_property(db: Session, property_id: int) -> List[InvestmentReservation]:
    ledger.get_property(db, property_id)
    stmt = (
        select(InvestmentReservation)
        .where(InvestmentReservation.property_id == property_id)
        .order_by(InvestmentReservation.created_at.desc(), InvestmentReservation.id.desc())
    )
    return list(db.scalars(stmt))


def investor_summary(db: Session, email: str) -> InvestorSummary:
    """Totals for the investor dashboard: amount invested, count and expected yearly return."""
    email_norm = email.strip().lower()
    rows = db.execute(
        select(InvestmentReservation.units, Property.min_investment, Property.projected_return)
        .join(Property, Property.id == InvestmentReservation.property_id)
        .where(InvestmentReservation.email == email_norm)
    ).all()

    total_invested = 0
    total_units = 0
    expected_returns = Decimal("0")
    for units, min_investment, projected_return in rows:
        invested = units * min_investment
        total_invested += invested
        total_units += units
        expected_returns += Decimal(invested) * Decimal(projected_return) / Decimal(100)

    return InvestorSummary(
        email=email_norm,
        total_invested=total_invested,
        active_investments=len(rows),
        total_units=total_units,
        expected_returns=expected_returns.quantize(Decimal("0.01")),
    )
