"""
Payment Record Model — One row per user-confirmed UPI transfer.
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Float, Boolean

from paydesk.database import Base


class PaymentRecord(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    transaction_id = Column(String(32), unique=True, nullable=False, index=True)  # REC-YYYYMMDD-NNNN

    name = Column(String(128), nullable=False)
    phone = Column(String(10), nullable=False)
    address = Column(String(512), nullable=False)
    amount = Column(Float, nullable=False)        # Rupees, minimum ₹100

    status = Column(String(16), nullable=False, default="success")
    is_trashed = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)  # naive UTC
