from paydesk.services.settings_store import SettingsStore
from paydesk.services.txn_id_service import TransactionIdGenerator
from paydesk.services.payment_store import PaymentStore
from paydesk.services.payment_lifecycle import PaymentLifecycle
from paydesk.services.admin_auth import AdminAuthService

__all__ = ["SettingsStore", "TransactionIdGenerator", "PaymentStore", "PaymentLifecycle", "AdminAuthService"]
