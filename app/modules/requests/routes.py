from fastapi import APIRouter, Depends
from app.config import settings
from app.core.dependencies import require_member
from app.core.pagination import Page
from app.core.validation import raise_for_errors
from app.database.supabase_client import get_supabase
from app.modules.requests.schemas import RequestUpdate, RequestResponse
from app.modules.requests.service import RequestService
from app.modules.requests.validation import validate_request_update
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/requests", tags=["requests"])


def get_request_service(supabase: Client = Depends(get_supabase)) -> RequestService:
    return RequestService(supabase)


@router.get("", response_model=Page[RequestResponse])
async def list_requests(
    page: int = 1,
    limit: int = settings.default_page_size,
    user_data: Dict = Depends(require_member),
    service: RequestService = Depends(get_request_service)
):
    return service.list_requests(page=page, limit=limit)


@router.get("/{request_id}", response_model=RequestResponse)
async def get_request(
    request_id: str,
    user_data: Dict = Depends(require_member),
    service: RequestService = Depends(get_request_service)
):
    return service.get_request_by_id(request_id)


@router.put("/{request_id}", response_model=RequestResponse)
async def update_request(
    request_id: str,
    request_data: RequestUpdate,
    user_data: Dict = Depends(require_member),
    service: RequestService = Depends(get_request_service)
):
    """Partial update; only the fields sent are written"""
    raise_for_errors(validate_request_update(request_data.model_dump(exclude_unset=True)))
    return service.update_request(request_id, request_data)


@router.delete("/{request_id}", status_code=204)
async def delete_request(
    request_id: str,
    user_data: Dict = Depends(require_member),
    service: RequestService = Depends(get_request_service)
):
    service.delete_request(request_id)
    return None
