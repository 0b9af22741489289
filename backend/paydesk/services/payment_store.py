"""
Payment Store — Durable payment records and their trash/restore/purge transitions.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from paydesk.exceptions import DuplicateTransactionId
from paydesk.models.payment import PaymentRecord
from paydesk.services.txn_id_service import Clock, to_db_time, utc_now

logger = logging.getLogger(__name__)


class PaymentStore:
    """Table-level operations on ``payments``.

    Single-record transitions never raise: trash/restore are idempotent and
    return ``False`` only for a missing id; purge returns ``False`` for a
    missing or non-trashed id and leaves it untouched.
    Bulk transitions run as one UPDATE/DELETE statement each.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or utc_now

    # ── Creation ───────────────────────────────────────────────────

    def insert(
        self,
        transaction_id: str,
        name: str,
        phone: str,
        address: str,
        amount: float,
        created_at: Optional[datetime] = None,
    ) -> PaymentRecord:
        """Persist a new successful payment, stamped with ``created_at`` (aware) or the store clock.

        Raises:
            DuplicateTransactionId: ``transaction_id`` is already taken.
        """
        record = PaymentRecord(
            transaction_id=transaction_id,
            name=name,
            phone=phone,
            address=address,
            amount=amount,
            status="success",
            is_trashed=False,
            created_at=to_db_time(created_at or self.clock()),
        )
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateTransactionId(f"Transaction ID {transaction_id} already exists") from exc

        self.db.refresh(record)
        return record

    # ── Listings ───────────────────────────────────────────────────

    def get(self, payment_id: int) -> Optional[PaymentRecord]:
        return self.db.query(PaymentRecord).filter(PaymentRecord.id == payment_id).first()

    def list_active(self, search: Optional[str] = None) -> list[PaymentRecord]:
        return self._list(trashed=False, search=search)

    def list_trashed(self, search: Optional[str] = None) -> list[PaymentRecord]:
        return self._list(trashed=True, search=search)

    def _list(self, trashed: bool, search: Optional[str]) -> list[PaymentRecord]:
        query = self.db.query(PaymentRecord).filter(PaymentRecord.is_trashed == trashed)

        if search:
            term = search.strip()
            query = query.filter(
                or_(
                    PaymentRecord.name.icontains(term, autoescape=True),
                    PaymentRecord.phone.contains(term, autoescape=True),
                    PaymentRecord.transaction_id.icontains(term, autoescape=True),
                )
            )

        # id breaks ties between records created within the same clock tick
        return query.order_by(PaymentRecord.created_at.desc(), PaymentRecord.id.desc()).all()

    # ── Single-record transitions ──────────────────────────────────

    def trash(self, payment_id: int) -> bool:
        return self._set_trashed(payment_id, True)

    def restore(self, payment_id: int) -> bool:
        return self._set_trashed(payment_id, False)

    def _set_trashed(self, payment_id: int, trashed: bool) -> bool:
        """Returns True when the record exists (and is now in the requested state)."""
        result = self.db.execute(
            update(PaymentRecord)
            .where(PaymentRecord.id == payment_id)
            .values(is_trashed=trashed)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        found = result.rowcount > 0
        if found:
            logger.info("Payment %s %s", payment_id, "trashed" if trashed else "restored")
        return found

    def purge(self, payment_id: int) -> bool:
        """Permanently delete a record. Only trashed records can be purged."""
        result = self.db.execute(
            delete(PaymentRecord)
            .where(PaymentRecord.id == payment_id, PaymentRecord.is_trashed.is_(True))
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        purged = result.rowcount > 0
        if purged:
            logger.info("Payment %s permanently deleted", payment_id)
        return purged

    # ── Bulk transitions ───────────────────────────────────────────

    def trash_all(self) -> int:
        return self._set_all_trashed(True)

    def restore_all(self) -> int:
        return self._set_all_trashed(False)

    def _set_all_trashed(self, trashed: bool) -> int:
        result = self.db.execute(
            update(PaymentRecord)
            .where(PaymentRecord.is_trashed == (not trashed))
            .values(is_trashed=trashed)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info("%s %d payments", "Trashed" if trashed else "Restored", result.rowcount)
        return result.rowcount

    def purge_all_trashed(self) -> int:
        result = self.db.execute(
            delete(PaymentRecord)
            .where(PaymentRecord.is_trashed.is_(True))
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info("Permanently deleted %d trashed payments", result.rowcount)
        return result.rowcount
