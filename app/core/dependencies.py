"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.errors import AuthenticationError, BackendOperationError, PermissionDeniedError
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ROLES = ("editor", "admin")


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the authenticated caller from the bearer token"""
    return auth_service.get_current_user(token)


def get_member_role(user_data: Dict[str, Any], supabase: Client) -> Optional[str]:
    """Role from the permissions table; a member without a row has no role."""
    if "role" in user_data:
        return user_data["role"]
    # user_metadata is writable by the user, so it never grants a role
    try:
        result = supabase.table("permissions")\
            .select("role")\
            .eq("member_id", user_data["id"])\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Error getting member role: {e}")
        raise BackendOperationError(f"Failed to fetch member role: {str(e)}")
    role = result.data[0].get("role") if result.data else None
    user_data["role"] = role
    return role


def require_role(*allowed_roles: str):
    """Factory function to create role check dependency"""
    def check_role(
        request: Request,
        user_data: Dict[str, Any] = Depends(get_current_user),
        supabase: Client = Depends(get_supabase)
    ) -> Dict[str, Any]:
        role = get_member_role(user_data, supabase)
        if role not in allowed_roles:
            logger.warning(
                "Denied %s %s for user %s with role %s",
                request.method, request.url.path, user_data.get("id"), role,
            )
            raise PermissionDeniedError(
                f"Insufficient permissions. Required role: {' or '.join(allowed_roles)}"
            )
        return user_data
    return check_role


require_member = require_role(*ROLES)
require_admin = require_role("admin")
