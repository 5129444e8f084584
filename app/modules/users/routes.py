from fastapi import APIRouter, Depends
from app.config import settings
from app.core.dependencies import require_admin
from app.core.errors import PermissionDeniedError
from app.core.pagination import Page
from app.database.supabase_client import get_service_supabase
from app.modules.users.schemas import MemberCreate, MemberUpdate, MemberResponse
from app.modules.users.service import UserService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_service_supabase)) -> UserService:
    return UserService(supabase)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    member_data: MemberCreate,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Create a member (requires admin role)"""
    return service.create_member(member_data)


@router.get("", response_model=Page[MemberResponse])
async def list_members(
    page: int = 1,
    limit: int = settings.default_page_size,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    return service.list_members(page=page, limit=limit)


@router.get("/{user_id}", response_model=MemberResponse)
async def get_member(
    user_id: str,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    return service.get_member_by_id(user_id)


@router.put("/{user_id}", response_model=MemberResponse)
async def update_member(
    user_id: str,
    member_data: MemberUpdate,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    return service.update_member(user_id, member_data)


@router.delete("/{user_id}", status_code=204)
async def delete_member(
    user_id: str,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Delete a member; admins cannot delete themselves"""
    if user_id == user_data["id"]:
        raise PermissionDeniedError("You cannot delete your own account")
    service.delete_member(user_id)
    return None
