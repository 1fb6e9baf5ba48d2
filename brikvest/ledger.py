"""
brikvest/ledger.py

Property ledger: the authoritative available-slot count and funding progress
for each property, plus the admin CRUD around it.

Invariants kept here:
- 0 <= available_slots <= total_slots
- funding_progress == round_half_up((total_slots - available_slots) / total_slots * 100)
  after every reservation. Admin edits store what the admin supplies.

Slot decrements are a single conditional UPDATE, so two requests racing on a
stale read cannot oversell a property.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from brikvest.errors import InsufficientSlotsError, NotFoundError, ValidationError
from brikvest.models import Property
from brikvest.schemas import PropertyWrite

logger = logging.getLogger(__name__)


def compute_funding_progress(total_slots: int, available_slots: int) -> int:
    """
    Percentage of slots reserved, rounded half up and clamped to [0, 100].

    Integer arithmetic only: floor(reserved * 100 / total + 0.5).
    """
    if total_slots <= 0:
        return 0
    reserved = total_slots - available_slots
    progress = (reserved * 200 + total_slots) // (2 * total_slots)
    return max(0, min(100, progress))


def list_properties(db: Session) -> List[Property]:
    return list(db.scalars(select(Property).order_by(Property.created_at.desc(), Property.id.desc())))


def get_property(db: Session, property_id: int) -> Property:
    prop = db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


def reserve_slots(db: Session, property_id: int, units: int) -> Property:
    """
    Take `units` slots from a property inside the caller's transaction.

    Does not commit. Raises NotFoundError for an unknown property and
    InsufficientSlotsError when fewer than `units` slots remain, including the
    case where a concurrent request consumed them after our read.
    """
    if units <= 0:
        raise ValidationError("units must be greater than zero")

    prop = get_property(db, property_id)
    if units > prop.available_slots:
        raise InsufficientSlotsError()

    result = db.execute(
        update(Property)
        .where(Property.id == property_id, Property.available_slots >= units)
        .values(available_slots=Property.available_slots - units)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.info("[LEDGER] Lost race for property_id=%s units=%s", property_id, units)
        raise InsufficientSlotsError()

    # Row is now write-locked by this transaction; re-read the real counts
    db.refresh(prop)
    prop.funding_progress = compute_funding_progress(prop.total_slots, prop.available_slots)
    db.flush()

    logger.debug(
        "[LEDGER] Reserved %s slots on property_id=%s -> available=%s progress=%s%%",
        units, property_id, prop.available_slots, prop.funding_progress,
    )
    return prop


def create_property(db: Session, data: PropertyWrite) -> Property:
    prop = Property(**data.model_dump())
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info("[LEDGER] Created property_id=%s name=%r", prop.id, prop.name)
    return prop


def edit_property(db: Session, property_id: int, data: PropertyWrite) -> Property:
    """Full overwrite of the business fields. Last write wins."""
    prop = get_property(db, property_id)
    for field, value in data.model_dump().items():
        setattr(prop, field, value)
    db.commit()
    db.refresh(prop)
    logger.info("[LEDGER] Updated property_id=%s", property_id)
    return prop


def delete_property(db: Session, property_id: int) -> None:
    """Delete a property together with its reservations and groups."""
    prop = get_property(db, property_id)
    db.delete(prop)
    db.commit()
    logger.info("[LEDGER] Deleted property_id=%s (reservations and groups cascaded)", property_id)
