import hashlib
import logging
import time
from supabase import Client
from app.core.errors import AuthenticationError
from app.modules.auth.schemas import LoginRequest, TokenResponse
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Token -> caller lookups are cached briefly; the admin UI fires several requests per page with one token
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_user(token: str) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(_cache_key(token))
    if entry is None:
        return None
    user_data, expiry = entry
    if time.monotonic() >= expiry:
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        return None
    return dict(user_data)


def _remember_user(token: str, user_data: Dict[str, Any]) -> None:
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[_cache_key(token)] = (dict(user_data), time.monotonic() + _AUTH_CACHE_TTL_SEC)


def _forget_token(token: str) -> None:
    _AUTH_USER_CACHE.pop(_cache_key(token), None)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Password sign-in for a member of the admin area"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            logger.warning(f"Login failed for {login_data.email}: {str(e)}")
            raise AuthenticationError("Invalid email or password")

        if not auth_response.user or not auth_response.session:
            raise AuthenticationError("Invalid email or password")

        logger.info(f"Member {auth_response.user.id} signed in")
        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the caller behind a bearer token; raises AuthenticationError when it cannot."""
        cached = _cached_user(token)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise AuthenticationError("Invalid or expired token")
        if not user_response or not user_response.user:
            raise AuthenticationError("Invalid or expired token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }
        _remember_user(token, user_data)
        return user_data

    def logout(self, token: str) -> bool:
        """Sign out and drop the cached lookup for this token"""
        _forget_token(token)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {str(e)}")
            return False
        return True
