"""
Transaction ID Service — Daily-sequential receipt numbers.
"""
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.exceptions import CapacityExceeded
from paydesk.models.payment import PaymentRecord

settings = get_settings()

MAX_DAILY_SEQUENCE = 9999

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_db_time(moment: datetime) -> datetime:
    """Convert an aware datetime to the naive-UTC form stored in ``created_at``."""
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(moment: datetime, tz: ZoneInfo) -> datetime:
    """Midnight of the calendar day of ``moment`` in ``tz``, as naive UTC."""
    local = moment.astimezone(tz)
    return to_db_time(local.replace(hour=0, minute=0, second=0, microsecond=0))


class TransactionIdGenerator:
    """Generates receipt IDs of the form ``REC-YYYYMMDD-NNNN``.

    The date and the start of the day are taken in ``TXN_TIMEZONE``. The
    sequence is one past the number of records created today (trashed ones
    included), or one past the highest sequence already issued today if that
    is larger, which only happens after a same-day purge.

    Uniqueness is not guaranteed here: two concurrent callers can compute the
    same ID. The ``transaction_id`` unique constraint is the authority and the
    caller retries on collision.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or utc_now
        self.tz = ZoneInfo(settings.TXN_TIMEZONE)

    def next(self, now: Optional[datetime] = None) -> str:
        """Propose the next transaction ID for the day of ``now`` (default: the clock).

        Raises:
            CapacityExceeded: the 4-digit sequence would overflow.
        """
        now_local = (now or self.clock()).astimezone(self.tz)
        date_str = now_local.strftime("%Y%m%d")
        day_start = start_of_day(now_local, self.tz)
        prefix = f"{settings.TXN_PREFIX}-{date_str}-"

        count = (
            self.db.query(func.count(PaymentRecord.id))
            .filter(PaymentRecord.created_at >= day_start)
            .scalar()
        ) or 0

        sequence = max(count, self._highest_sequence(prefix)) + 1
        if sequence > MAX_DAILY_SEQUENCE:
            raise CapacityExceeded(
                f"Daily sequence exhausted for {date_str}: more than {MAX_DAILY_SEQUENCE} payments"
            )

        return f"{prefix}{sequence:04d}"

    def _highest_sequence(self, prefix: str) -> int:
        latest = (
            self.db.query(PaymentRecord.transaction_id)
            .filter(PaymentRecord.transaction_id.startswith(prefix, autoescape=True))
            .order_by(PaymentRecord.transaction_id.desc())
            .first()
        )
        if latest is None:
            return 0
        suffix = latest[0][len(prefix):]
        return int(suffix) if suffix.isdigit() else 0
