"""
Pydantic Schemas — Request & Response models for API validation.
"""
from datetime import datetime
from typing import Optional, Union, List
from pydantic import BaseModel, Field


# ──────────────── Payment submission ────────────────

class PaymentSubmitRequest(BaseModel):
    """Raw form fields. Checked by the lifecycle service, not here."""
    name: Optional[str] = None
    phone: Optional[Union[str, int]] = None
    address: Optional[str] = None
    amount: Optional[Union[float, str]] = Field(None, description="Amount in INR (min ₹100)")


class TransferTargetResponse(BaseModel):
    payee_vpa: str
    payee_name: str
    amount: float
    currency: str = "INR"
    note: str
    upi_url: str


class PaymentOut(BaseModel):
    id: int
    transaction_id: str
    name: str
    phone: str
    address: str
    amount: float
    status: str
    is_trashed: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PaymentConfirmResponse(BaseModel):
    status: str = "success"
    transaction_id: str
    payment: PaymentOut


# ──────────────── Gate ────────────────

class GateStatusResponse(BaseModel):
    value: str


class GateUpdateRequest(BaseModel):
    status: Optional[str] = Field(None, description="active | paused")


class GateUpdateResponse(BaseModel):
    success: bool
    status: str


# ──────────────── Admin ────────────────

class AdminLoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AdminLoginResponse(BaseModel):
    success: bool
    token: Optional[str] = None


class ActionResponse(BaseModel):
    success: bool
    affected: Optional[int] = None


class AdminSummaryResponse(BaseModel):
    active_count: int
    trashed_count: int
    active_total_amount: float
    today_count: int
    gate: str


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    database: str
    gate: Optional[str] = None
    uptime_seconds: float
    version: str


class ErrorResponse(BaseModel):
    error: str


PaymentList = List[PaymentOut]
