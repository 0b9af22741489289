"""
Domain exceptions for the payment lifecycle.

Services raise these; the application turns any ``PaydeskError`` into a
``{"error": message}`` JSON response with the mapped status code.
"""


class PaydeskError(Exception):
    """Base exception for all paydesk service errors."""
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PaydeskError):
    """Submitted payment fields are missing or malformed. No side effects occurred."""
    status_code = 400
    default_message = "Invalid payment details"


class InvalidArgument(PaydeskError):
    """An admin operation received a value outside its allowed set."""
    status_code = 400
    default_message = "Invalid argument"


class Unauthorized(PaydeskError):
    status_code = 401
    default_message = "Invalid credentials"


class PaymentsPaused(PaydeskError):
    """The payment gate is closed; retry once the administrator resumes collection."""
    status_code = 403
    default_message = "Payments are currently paused by the administrator."


class Conflict(PaydeskError):
    """Transaction ID kept colliding after bounded retries. Safe to retry the whole confirmation."""
    status_code = 409
    default_message = "Could not allocate a unique transaction ID, please retry"


class CapacityExceeded(PaydeskError):
    """The 4-digit daily sequence is exhausted."""
    status_code = 503
    default_message = "Daily payment capacity reached, no more receipts can be issued today"


class DuplicateTransactionId(PaydeskError):
    """Raised by the record store when an insert collides on transaction_id."""
    status_code = 409
    default_message = "Duplicate transaction ID"
