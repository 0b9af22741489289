from paydesk.models.payment import PaymentRecord
from paydesk.models.setting import Setting

__all__ = ["PaymentRecord", "Setting"]
