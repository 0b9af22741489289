from paydesk.schemas.schemas import PaymentOut, PaymentSubmitRequest

__all__ = ["PaymentOut", "PaymentSubmitRequest"]
