"""
Admin Auth Service — Single static admin identity.

Known gap: failed logins are not rate-limited or locked out.
"""
import logging

from paydesk.config import get_settings
from paydesk.exceptions import Unauthorized
from paydesk.utils.hashing import generate_token, safe_equals

logger = logging.getLogger(__name__)
settings = get_settings()


class AdminAuthService:
    """Checks credentials against ADMIN_USERNAME / ADMIN_PASSWORD."""

    @staticmethod
    def login(username: str | None, password: str | None) -> bool:
        """Return True for the configured admin.

        Raises:
            Unauthorized: on any mismatch.
        """
        user_ok = safe_equals(username, settings.ADMIN_USERNAME)
        pass_ok = safe_equals(password, settings.ADMIN_PASSWORD)
        if not (user_ok and pass_ok):
            logger.warning("Failed admin login for username=%r", username)
            raise Unauthorized()

        logger.info("Admin %s logged in", username)
        return True

    @staticmethod
    def issue_token() -> str:
        """Token the HTTP layer hands out after a successful login."""
        return generate_token(settings.ADMIN_USERNAME, settings.SECRET_KEY)

    @staticmethod
    def verify_token(token: str | None) -> bool:
        return safe_equals(token, AdminAuthService.issue_token())
