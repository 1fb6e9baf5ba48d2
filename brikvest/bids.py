"""
brikvest/bids.py

Developer bids: construction proposals submitted by developers for review.
Bids are recorded as pending; review happens outside the API.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from brikvest.errors import NotFoundError
from brikvest.models import BidStatus, DeveloperBid
from brikvest.schemas import DeveloperBidCreate

logger = logging.getLogger(__name__)


def create_bid(db: Session, data: DeveloperBidCreate) -> DeveloperBid:
    bid = DeveloperBid(**data.model_dump(), status=BidStatus.pending)
    db.add(bid)
    db.commit()
    db.refresh(bid)
    logger.info("[BIDS] Received bid_id=%s from company=%r", bid.id, bid.company_name)
    return bid


def list_bids(db: Session) -> List[DeveloperBid]:
    return list(db.scalars(select(DeveloperBid).order_by(DeveloperBid.created_at.desc(), DeveloperBid.id.desc())))


def get_bid(db: Session, bid_id: int) -> DeveloperBid:
    bid = db.get(DeveloperBid, bid_id)
    if bid is None:
        raise NotFoundError("Developer bid not found")
    return bid
