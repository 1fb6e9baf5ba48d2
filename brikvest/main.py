# ---------------------------------------------------------
# brikvest/main.py
# Brikvest - Fractional Real-Estate Marketplace Backend
#
# Run: uvicorn brikvest.main:app --reload (from repo root)
#
# - FastAPI + SQLAlchemy (PostgreSQL or SQLite)
# - /api/properties        : catalogue and admin CRUD
# - /api/reservations      : slot reservations and investor lookups
# - /api/investment-groups : group pools, invites and contributions
# - /api/developer-bids    : developer proposals
# - /api/admin             : admin session login/logout/me
# - /api/upload            : admin document and image uploads
# ---------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from brikvest.config import CORS_ORIGINS, IS_PROD, LOG_LEVEL, PUBLIC_UPLOAD_URL, UPLOAD_DIR, log_settings
from brikvest.db import init_db
from brikvest.errors import register_error_handlers
from brikvest.routes_admin import router as admin_router
from brikvest.routes_bids import router as bids_router
from brikvest.routes_groups import router as groups_router
from brikvest.routes_properties import router as properties_router
from brikvest.routes_reservations import router as reservations_router
from brikvest.routes_uploads import router as uploads_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------
app = FastAPI(title="Brikvest Backend", version="0.1")

# CORS configuration from config module
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if IS_PROD else ["*"],  # Restrict origins in production
    allow_credentials=IS_PROD,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

log_settings()
init_db()

app.include_router(properties_router)
app.include_router(reservations_router)
app.include_router(bids_router)
app.include_router(groups_router)
app.include_router(admin_router)
app.include_router(uploads_router)

app.mount(PUBLIC_UPLOAD_URL, StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="uploads")


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}
