from fastapi import APIRouter, Depends
from app.core.dependencies import get_auth_service, get_current_token, get_current_user, get_member_role
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import LoginRequest, TokenResponse, CurrentUserResponse
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase),
):
    """Current authenticated member and their role (for the admin UI)."""
    get_member_role(current_user, supabase)
    return current_user
