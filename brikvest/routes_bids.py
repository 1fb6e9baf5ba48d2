"""
brikvest/routes_bids.py

Developer bid endpoints. Submission is public; review listing is admin only.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Path
from sqlalchemy.orm import Session

from brikvest import bids, email_templates, mailer
from brikvest.auth import AdminContext
from brikvest.db import get_db
from brikvest.dependencies import require_admin_auth
from brikvest.schemas import DeveloperBidCreate, DeveloperBidResponse

router = APIRouter(
    prefix="/api/developer-bids",
    tags=["developer-bids"],
)


def send_bid_acknowledgement(to_email: str, developer_name: str, company_name: str):
    subject, html = email_templates.developer_bid_acknowledgement(developer_name, company_name)
    mailer.send_email(to_email, subject, html)


@router.post("", response_model=DeveloperBidResponse, status_code=201)
def create_bid(
    request: DeveloperBidCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    bid = bids.create_bid(db, request)
    background_tasks.add_task(send_bid_acknowledgement, bid.email, bid.developer_name, bid.company_name)
    return bid


@router.get("", response_model=List[DeveloperBidResponse])
def list_bids(
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return bids.list_bids(db)


@router.get("/{bid_id}", response_model=DeveloperBidResponse)
def get_bid(
    bid_id: int = Path(..., description="Bid ID"),
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin_auth),
):
    return bids.get_bid(db, bid_id)
