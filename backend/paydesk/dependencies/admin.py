from typing import Optional

from fastapi import Header

from paydesk.exceptions import Unauthorized
from paydesk.services.admin_auth import AdminAuthService


def require_admin(admin_token: Optional[str] = Header(None, alias="admin-token")):
    if not AdminAuthService.verify_token(admin_token):
        raise Unauthorized("Admin access required")
    return True
