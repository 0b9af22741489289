"""
Admin Routes — Login, payment gate control, payment listings and trash management.
"""
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.database import get_db
from paydesk.dependencies.admin import require_admin
from paydesk.exceptions import Unauthorized
from paydesk.models.payment import PaymentRecord
from paydesk.schemas.schemas import (
    AdminLoginRequest, AdminLoginResponse, GateUpdateRequest, GateUpdateResponse,
    ActionResponse, AdminSummaryResponse, PaymentList,
)
from paydesk.services.admin_auth import AdminAuthService
from paydesk.services.payment_store import PaymentStore
from paydesk.services.settings_store import SettingsStore
from paydesk.services.txn_id_service import start_of_day

settings = get_settings()

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/login", response_model=AdminLoginResponse)
def admin_login(payload: AdminLoginRequest):
    """Check admin credentials. The returned token goes in the ``admin-token`` header."""
    try:
        AdminAuthService.login(payload.username, payload.password)
    except Unauthorized as exc:
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})
    return AdminLoginResponse(success=True, token=AdminAuthService.issue_token())


@router.post("/set-gate-status", response_model=GateUpdateResponse, dependencies=[Depends(require_admin)])
def set_gate_status(payload: GateUpdateRequest, db: Session = Depends(get_db)):
    """Pause or resume collection of new payments."""
    status = SettingsStore(db).set_status(payload.status)
    return GateUpdateResponse(success=True, status=status)


@router.get("/summary", response_model=AdminSummaryResponse, dependencies=[Depends(require_admin)])
def get_summary(db: Session = Depends(get_db)):
    """Aggregated counts for the dashboard header."""
    active_count = db.query(func.count(PaymentRecord.id)).filter(
        PaymentRecord.is_trashed.is_(False)
    ).scalar() or 0
    trashed_count = db.query(func.count(PaymentRecord.id)).filter(
        PaymentRecord.is_trashed.is_(True)
    ).scalar() or 0
    active_total = db.query(func.sum(PaymentRecord.amount)).filter(
        PaymentRecord.is_trashed.is_(False)
    ).scalar() or 0.0

    day_start = start_of_day(datetime.now(timezone.utc), ZoneInfo(settings.TXN_TIMEZONE))
    today_count = db.query(func.count(PaymentRecord.id)).filter(
        PaymentRecord.created_at >= day_start
    ).scalar() or 0

    return AdminSummaryResponse(
        active_count=active_count,
        trashed_count=trashed_count,
        active_total_amount=round(active_total, 2),
        today_count=today_count,
        gate=SettingsStore(db).get_status(),
    )


# ─── Listings ────────────────────────────────────────────────────────

@router.get("/payments", response_model=PaymentList, dependencies=[Depends(require_admin)])
def list_payments(search: Optional[str] = None, db: Session = Depends(get_db)):
    """Active payments, newest first. ``search`` matches name, phone or transaction ID."""
    return PaymentStore(db).list_active(search=search)


@router.get("/trash", response_model=PaymentList, dependencies=[Depends(require_admin)])
def list_trash(search: Optional[str] = None, db: Session = Depends(get_db)):
    """Trashed payments, newest first."""
    return PaymentStore(db).list_trashed(search=search)


# ─── Single-record transitions ───────────────────────────────────────

@router.post("/trash/{payment_id}", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def trash_payment(payment_id: int, db: Session = Depends(get_db)):
    return ActionResponse(success=PaymentStore(db).trash(payment_id))


@router.post("/restore/{payment_id}", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def restore_payment(payment_id: int, db: Session = Depends(get_db)):
    return ActionResponse(success=PaymentStore(db).restore(payment_id))


@router.post("/purge/{payment_id}", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def purge_payment(payment_id: int, db: Session = Depends(get_db)):
    """Permanently delete a payment. Only works on trashed payments."""
    return ActionResponse(success=PaymentStore(db).purge(payment_id))


# ─── Bulk transitions ────────────────────────────────────────────────

@router.post("/trash-all", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def trash_all(db: Session = Depends(get_db)):
    return ActionResponse(success=True, affected=PaymentStore(db).trash_all())


@router.post("/restore-all", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def restore_all(db: Session = Depends(get_db)):
    return ActionResponse(success=True, affected=PaymentStore(db).restore_all())


@router.post("/purge-trashed", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def purge_trashed(db: Session = Depends(get_db)):
    """Empty the trash."""
    return ActionResponse(success=True, affected=PaymentStore(db).purge_all_trashed())
