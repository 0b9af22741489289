"""
Payment Lifecycle — Public submission flow for manual UPI payments.

Two independent calls make up a submission:

* ``initiate`` validates, checks the gate and returns the transfer target
  (payee VPA, payee name, amount, note and a ``upi://pay`` deep link). It
  persists nothing.
* ``confirm`` runs after the payer says the transfer is done. It repeats the
  validation and gate check, allocates a transaction ID and stores the record.

Limitations carried on purpose:

* Confirmation is user-asserted. No gateway callback verifies that money
  moved, so this service guarantees bookkeeping integrity only.
* ``confirm`` does not check that its fields match an earlier ``initiate``;
  a payer can confirm different details than were quoted.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.exceptions import Conflict, DuplicateTransactionId, PaymentsPaused, ValidationError
from paydesk.models.payment import PaymentRecord
from paydesk.services.payment_store import PaymentStore
from paydesk.services.settings_store import SettingsStore
from paydesk.services.txn_id_service import Clock, TransactionIdGenerator, utc_now
from paydesk.utils.validators import clean_text, parse_amount, validate_amount, validate_phone

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class PaymentSubmission:
    name: str
    phone: str
    address: str
    amount: float


@dataclass(frozen=True)
class TransferTarget:
    payee_vpa: str
    payee_name: str
    amount: float
    currency: str
    note: str
    upi_url: str


def build_upi_url(payee_vpa: str, payee_name: str, amount: float, currency: str, note: str) -> str:
    """UPI deep link: upi://pay?pa=<vpa>&pn=<name>&am=<amount>&cu=<currency>&tn=<note>"""
    return (
        f"upi://pay?pa={payee_vpa}"
        f"&pn={quote(payee_name)}"
        f"&am={amount:.2f}"
        f"&cu={currency}"
        f"&tn={quote(note)}"
    )


class PaymentLifecycle:
    """Validation, gating, ID allocation and persistence for submissions."""

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        id_generator: Optional[TransactionIdGenerator] = None,
    ):
        self.clock = clock = clock or utc_now
        self.gate = SettingsStore(db)
        self.store = PaymentStore(db, clock=clock)
        self.id_generator = id_generator or TransactionIdGenerator(db, clock=clock)

    @staticmethod
    def validate(name, phone, address, amount) -> PaymentSubmission:
        """Check raw submitted fields and return them cleaned.

        Raises:
            ValidationError: with a message suitable for showing inline.
        """
        name, phone, address = clean_text(name), clean_text(phone), clean_text(address)
        raw_amount = clean_text(amount) if isinstance(amount, str) else amount

        if not name or not phone or not address or raw_amount in (None, ""):
            raise ValidationError("All fields are required")

        if not validate_phone(phone):
            raise ValidationError("Please enter a valid 10-digit phone number")

        ok, message = validate_amount(raw_amount, settings.MIN_PAYMENT_AMOUNT)
        if not ok:
            raise ValidationError(message)

        return PaymentSubmission(name=name, phone=phone, address=address, amount=parse_amount(raw_amount))

    def _ensure_open(self) -> None:
        if self.gate.is_paused():
            raise PaymentsPaused()

    def initiate(self, name, phone, address, amount) -> TransferTarget:
        """Return where and how much to pay. Nothing is persisted."""
        submission = self.validate(name, phone, address, amount)
        self._ensure_open()

        note = f"Payment from {submission.name}"
        return TransferTarget(
            payee_vpa=settings.ADMIN_UPI_ID,
            payee_name=settings.ADMIN_NAME,
            amount=submission.amount,
            currency=settings.PAYMENT_CURRENCY,
            note=note,
            upi_url=build_upi_url(
                settings.ADMIN_UPI_ID,
                settings.ADMIN_NAME,
                submission.amount,
                settings.PAYMENT_CURRENCY,
                note,
            ),
        )

    def confirm(self, name, phone, address, amount) -> PaymentRecord:
        """Record a user-confirmed payment under a fresh transaction ID.

        A collision on an ID greater than the previously collided one means
        another payment was recorded in between, so the retry is free. Any
        other collision spends one of ``TXN_ID_MAX_ATTEMPTS``. Each attempt
        reads the clock once, for both the ID date and ``created_at``.

        Raises:
            ValidationError, PaymentsPaused: before any ID is allocated.
            CapacityExceeded: today's sequence is exhausted.
            Conflict: the attempt budget ran out without progress.
        """
        submission = self.validate(name, phone, address, amount)
        self._ensure_open()

        budget = max(1, settings.TXN_ID_MAX_ATTEMPTS)
        attempts_left = budget
        last_collision = None
        while True:
            moment = self.clock()
            transaction_id = self.id_generator.next(moment)
            try:
                record = self.store.insert(
                    transaction_id=transaction_id,
                    name=submission.name,
                    phone=submission.phone,
                    address=submission.address,
                    amount=submission.amount,
                    created_at=moment,
                )
            except DuplicateTransactionId:
                if last_collision is None or transaction_id <= last_collision:
                    attempts_left -= 1
                last_collision = transaction_id
                logger.warning(
                    "Transaction ID %s collided (%d/%d attempts left)", transaction_id, attempts_left, budget
                )
                if attempts_left <= 0:
                    raise Conflict()
                continue

            logger.info("Payment %s recorded: ₹%.2f", record.transaction_id, record.amount)
            return record
