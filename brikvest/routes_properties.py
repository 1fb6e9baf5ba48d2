"""
brikvest/routes_properties.py

Property catalogue endpoints.

- Listing and detail are public
- Create, replace, delete and the per-property reservation list require an
  admin session (require_admin_auth)
- Validation via Pydantic schemas; business errors raised by brikvest.ledger
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from brikvest import ledger, reservations
from brikvest.auth import AdminContext
from brikvest.db import get_db
from brikvest.dependencies import require_admin_auth
from brikvest.schemas import MessageResponse, PropertyResponse, PropertyWrite, ReservationResponse

router = APIRouter(
    prefix="/api/properties",
    tags=["properties"],
)


@router.get("", response_model=List[PropertyResponse])
def list_properties(db: Session = Depends(get_db)):
    return ledger.list_properties(db)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int = Path(..., description="Property ID"),
    db: Session = Depends(get_db),
):
    return ledger.get_property(db, property_id)


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(
    request: PropertyWrite,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """
    Create a property (admin).

    Slot counts and funding progress are stored as supplied.

    Raises:
        400: invalid payload (availableSlots > totalSlots, missing fields, ...)
        401/403: no admin session
    """
    return ledger.create_property(db, request)


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    request: PropertyWrite,
    property_id: int = Path(..., description="Property ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """Replace every business field of a property (admin). Last write wins."""
    return ledger.edit_property(db, property_id, request)


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(
    property_id: int = Path(..., description="Property ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """Delete a property with its reservations and investment groups (admin)."""
    ledger.delete_property(db, property_id)
    return MessageResponse(message="Property deleted successfully")


@router.get("/{property_id}/reservations", response_model=List[ReservationResponse])
def list_property_reservations(
    property_id: int = Path(..., description="Property ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return reservations.list_reservations_for_property(db, property_id)
