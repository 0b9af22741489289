"""
Settings Store — Durable payment gate (``payment_status``: active | paused).
"""
import logging

from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from paydesk.exceptions import InvalidArgument
from paydesk.models.setting import Setting

logger = logging.getLogger(__name__)

PAYMENT_STATUS_KEY = "payment_status"
GATE_ACTIVE = "active"
GATE_PAUSED = "paused"
GATE_VALUES = (GATE_ACTIVE, GATE_PAUSED)


class SettingsStore:
    """Reads and writes the payment gate. Every write is committed before returning."""

    def __init__(self, db: Session):
        self.db = db

    def ensure_defaults(self) -> None:
        """Seed ``payment_status = active`` unless a value is already stored."""
        stmt = insert(Setting).values(key=PAYMENT_STATUS_KEY, value=GATE_ACTIVE)
        self.db.execute(stmt.on_conflict_do_nothing(index_elements=["key"]))
        self.db.commit()

    def get_status(self) -> str:
        row = self.db.get(Setting, PAYMENT_STATUS_KEY, populate_existing=True)
        if row is None:
            self.ensure_defaults()
            return GATE_ACTIVE
        return row.value

    def set_status(self, value: str) -> str:
        """Persist a new gate value.

        Raises:
            InvalidArgument: ``value`` is not ``active`` or ``paused``.
        """
        if value not in GATE_VALUES:
            raise InvalidArgument("Invalid status")

        stmt = insert(Setting).values(key=PAYMENT_STATUS_KEY, value=value)
        self.db.execute(
            stmt.on_conflict_do_update(index_elements=["key"], set_={"value": value})
        )
        self.db.commit()

        logger.info("Payment gate set to %s", value)
        return value

    def is_paused(self) -> bool:
        return self.get_status() == GATE_PAUSED
