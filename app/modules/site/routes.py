"""Unauthenticated endpoints used by the public marketing site."""
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from app.config import settings
from app.core.pagination import Page
from app.core.rate_limit import limiter
from app.core.validation import build_model, raise_for_errors
from app.database.supabase_client import get_supabase
from app.modules.cases.schemas import CaseResponse
from app.modules.cases.service import CaseService
from app.modules.requests.email_relay import EmailRelay, get_email_relay
from app.modules.requests.schemas import RequestCreate, OfferSubmitted
from app.modules.requests.service import RequestService
from app.modules.requests.validation import normalize_offer_form, validate_offer_form
from app.modules.reviews.schemas import ReviewResponse
from app.modules.reviews.service import ReviewService
from app.modules.viewer.schemas import ViewerConfig
from app.modules.viewer.scrubber import FRAME_TIME
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/site", tags=["site"])


class OfferForm(BaseModel):
    """Raw offer form; checked by validate_offer_form before use."""
    name: Optional[str] = None
    mobile: Optional[str] = None
    mail: Optional[str] = None
    category: Optional[str] = None
    consent: bool = False
    message: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None


def get_request_service(
    supabase: Client = Depends(get_supabase),
    email_relay: EmailRelay = Depends(get_email_relay)
) -> RequestService:
    return RequestService(supabase, email_relay)


@router.get("/cases", response_model=Page[CaseResponse])
async def list_public_cases(
    page: int = 1,
    limit: int = settings.default_page_size,
    supabase: Client = Depends(get_supabase)
):
    """Case previews, newest first"""
    return CaseService(supabase).list_cases(page=page, limit=limit)


@router.get("/reviews", response_model=List[ReviewResponse])
async def latest_reviews(
    limit: int = settings.latest_reviews_limit,
    supabase: Client = Depends(get_supabase)
):
    limit = max(1, min(limit, settings.max_page_size))
    return ReviewService(supabase).get_latest_reviews(limit)


@router.post("/requests", response_model=OfferSubmitted, status_code=201)
@limiter.limit(settings.offer_form_rate_limit)
async def submit_offer(
    request: Request,
    offer_form: OfferForm,
    service: RequestService = Depends(get_request_service)
):
    """Offer form: store the lead and notify the agency by email"""
    form = normalize_offer_form(offer_form.model_dump())
    raise_for_errors(validate_offer_form(form))
    request_data = build_model(RequestCreate, form)
    return service.submit_offer(request_data)


@router.get("/viewer", response_model=ViewerConfig)
async def viewer_config():
    """Settings for the scroll-scrubbed laptop model in the hero section"""
    return ViewerConfig(
        model_url=settings.viewer_model_url,
        max_scroll=settings.viewer_max_scroll,
        frame_time=FRAME_TIME,
        target_size=settings.viewer_target_size,
    )
