"""
Payment Routes — Public manual UPI payment flow.
Handles: transfer target (initiate), user confirmation, gate status.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from paydesk.database import get_db
from paydesk.schemas.schemas import (
    PaymentSubmitRequest, TransferTargetResponse, PaymentConfirmResponse,
    PaymentOut, GateStatusResponse, ErrorResponse,
)
from paydesk.services.payment_lifecycle import PaymentLifecycle
from paydesk.services.settings_store import SettingsStore

router = APIRouter(
    prefix="/api",
    tags=["Payment"],
    responses={400: {"model": ErrorResponse, "description": "Invalid payment details"}},
)

GATE_CLOSED = {403: {"model": ErrorResponse, "description": "Payments are paused"}}


@router.post("/initiate-payment", response_model=TransferTargetResponse, responses=GATE_CLOSED)
def initiate_payment(payload: PaymentSubmitRequest, db: Session = Depends(get_db)):
    """Validate the form and return the UPI transfer target. Persists nothing."""
    target = PaymentLifecycle(db).initiate(
        payload.name, payload.phone, payload.address, payload.amount,
    )
    return TransferTargetResponse(
        payee_vpa=target.payee_vpa,
        payee_name=target.payee_name,
        amount=target.amount,
        currency=target.currency,
        note=target.note,
        upi_url=target.upi_url,
    )


@router.post(
    "/confirm-payment",
    response_model=PaymentConfirmResponse,
    responses={
        **GATE_CLOSED,
        409: {"model": ErrorResponse, "description": "Transaction ID conflict, safe to retry"},
        503: {"model": ErrorResponse, "description": "Daily receipt capacity reached"},
    },
)
def confirm_payment(payload: PaymentSubmitRequest, db: Session = Depends(get_db)):
    """Record a payment the user says they have completed."""
    payment = PaymentLifecycle(db).confirm(
        payload.name, payload.phone, payload.address, payload.amount,
    )
    return PaymentConfirmResponse(
        transaction_id=payment.transaction_id,
        payment=PaymentOut.model_validate(payment),
    )


@router.get("/payment-gate-status", response_model=GateStatusResponse)
def get_gate_status(db: Session = Depends(get_db)):
    """Whether new payments are currently accepted (active | paused)."""
    return GateStatusResponse(value=SettingsStore(db).get_status())
