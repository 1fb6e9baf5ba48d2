"""
brikvest/routes_reservations.py

Investor reservation endpoints.

- POST /api/reservations records a reservation and takes the slots in one
  transaction, then queues a confirmation email
- Investor lookups are keyed by email (no investor accounts)
- /all is admin only
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from brikvest import email_templates, ledger, mailer, reservations
from brikvest.auth import AdminContext
from brikvest.db import get_db
from brikvest.dependencies import require_admin_auth
from brikvest.schemas import InvestorSummary, ReservationCreate, ReservationResponse

router = APIRouter(
    prefix="/api/reservations",
    tags=["reservations"],
)


def send_investment_confirmation(to_email: str, full_name: str, property_name: str, amount: int, referral_code):
    subject, html = email_templates.investment_confirmation(full_name, property_name, amount, referral_code)
    mailer.send_email(to_email, subject, html)


@router.post("", response_model=ReservationResponse, status_code=201)
def create_reservation(
    request: ReservationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Reserve `units` slots of a property.

    Raises:
        400: invalid payload or not enough available slots
        404: unknown property
    """
    reservation = reservations.create_reservation(db, request)
    prop = ledger.get_property(db, reservation.property_id)

    background_tasks.add_task(
        send_investment_confirmation,
        reservation.email,
        reservation.full_name,
        prop.name,
        reservation.units * prop.min_investment,
        reservation.referral_code,
    )
    return reservation


@router.get("/all", response_model=List[ReservationResponse])
def list_all_reservations(
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return reservations.list_all_reservations(db)


@router.get("/summary", response_model=InvestorSummary)
def reservation_summary(
    email: str = Query(..., min_length=3, description="Investor email"),
    db: Session = Depends(get_db),
):
    return reservations.investor_summary(db, email)


@router.get("", response_model=List[ReservationResponse])
def list_reservations(
    email: str = Query(..., min_length=3, description="Investor email"),
    db: Session = Depends(get_db),
):
    return reservations.list_reservations_by_email(db, email)
