"""
Setting Model — Durable key/value pairs. Holds the ``payment_status`` gate.
"""
from sqlalchemy import Column, String

from paydesk.database import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(64), primary_key=True)
    value = Column(String(64), nullable=False)
