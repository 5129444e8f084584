from fastapi import APIRouter, Depends
from app.core.dependencies import require_member
from app.database.supabase_client import get_supabase
from app.modules.overview.schemas import OverviewResponse
from app.modules.overview.service import OverviewService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/overview", tags=["overview"])


def get_overview_service(supabase: Client = Depends(get_supabase)) -> OverviewService:
    return OverviewService(supabase)


@router.get("", response_model=OverviewResponse)
async def get_overview(
    user_data: Dict = Depends(require_member),
    service: OverviewService = Depends(get_overview_service)
):
    """Totals shown on the admin landing page"""
    return service.get_overview()
