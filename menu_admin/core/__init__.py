from menu_admin.core.auth import create_access_token, get_current_user, require_role
from menu_admin.core.logging import get_logger, request_id_ctx

__all__ = ["create_access_token", "get_current_user", "require_role", "get_logger", "request_id_ctx"]
