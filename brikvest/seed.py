"""
Sample property catalogue for fresh environments.

Seeding only runs against an empty properties table, so it is safe to call
repeatedly.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from brikvest.ledger import compute_funding_progress
from brikvest.models import Property, PropertyStatus

logger = logging.getLogger(__name__)

_UNSPLASH = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=400"

SAMPLE_PROPERTIES = [
    {
        "name": "Victoria Island Office Complex",
        "location": "Victoria Island, Lagos",
        "description": "Premium 24-unit commercial office complex in Lagos's financial district with modern amenities and high occupancy rates.",
        "total_value": 1_200_000_000,
        "min_investment": 500_000,
        "projected_return": Decimal("12.50"),
        "available_slots": 127,
        "total_slots": 240,
        "image_url": _UNSPLASH.format("photo-1486406146926-c627a92ad1ab"),
    },
    {
        "name": "Luxury Residences Lekki",
        "location": "Lekki Phase 1, Lagos",
        "description": "Grade A residential complex in Lekki's rapidly growing area with long-term corporate tenants and expatriate housing.",
        "total_value": 1_600_000_000,
        "min_investment": 750_000,
        "projected_return": Decimal("15.20"),
        "available_slots": 89,
        "total_slots": 213,
        "image_url": _UNSPLASH.format("photo-1560448204-e02f11c3d0e2"),
    },
    {
        "name": "Ikeja City Mall",
        "location": "Ikeja, Lagos",
        "description": "Modern retail plaza with anchor tenants and prime location in Lagos's commercial hub.",
        "total_value": 900_000_000,
        "min_investment": 400_000,
        "projected_return": Decimal("11.80"),
        "available_slots": 156,
        "total_slots": 180,
        "image_url": _UNSPLASH.format("photo-1441986300917-64674bd600d8"),
    },
    {
        "name": "Logistics Hub Ogun",
        "location": "Ogun State",
        "description": "Strategic industrial facility serving major e-commerce and distribution networks in Southwest Nigeria.",
        "total_value": 2_050_000_000,
        "min_investment": 1_000_000,
        "projected_return": Decimal("10.50"),
        "available_slots": 78,
        "total_slots": 205,
        "image_url": _UNSPLASH.format("photo-1587293852726-70cdb56c2866"),
    },
    {
        "name": "Abuja Mixed-Use Tower",
        "location": "Central Business District, Abuja",
        "description": "Mixed-use development combining retail, office, and residential spaces in Nigeria's capital city.",
        "total_value": 2_800_000_000,
        "min_investment": 1_250_000,
        "projected_return": Decimal("16.80"),
        "available_slots": 45,
        "total_slots": 224,
        "image_url": _UNSPLASH.format("photo-1582407947304-fd86f028f716"),
    },
    {
        "name": "Eko Atlantic Towers",
        "location": "Eko Atlantic City, Lagos",
        "description": "Premium waterfront property development with luxury amenities and strong rental potential in Lagos's new financial center.",
        "total_value": 4_100_000_000,
        "min_investment": 2_500_000,
        "projected_return": Decimal("18.50"),
        "available_slots": 67,
        "total_slots": 164,
        "image_url": _UNSPLASH.format("photo-1564013799919-ab600027ffc6"),
    },
]


def seed_properties(db: Session) -> bool:
    """Insert the sample catalogue when no properties exist. Returns True if it inserted."""
    existing = db.scalar(select(func.count()).select_from(Property))
    if existing:
        logger.info("[SEED] %s properties already exist, skipping", existing)
        return False

    for data in SAMPLE_PROPERTIES:
        progress = compute_funding_progress(data["total_slots"], data["available_slots"])
        db.add(Property(status=PropertyStatus.active, funding_progress=progress, **data))
    db.commit()
    logger.info("[SEED] Inserted %s sample properties", len(SAMPLE_PROPERTIES))
    return True
