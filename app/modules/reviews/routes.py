from fastapi import APIRouter, Depends
from pydantic import BaseModel
from app.config import settings
from app.core.dependencies import require_member
from app.core.pagination import Page
from app.core.validation import build_model, raise_for_errors
from app.database.supabase_client import get_supabase
from app.modules.reviews.schemas import ReviewCreate, ReviewUpdate, ReviewResponse
from app.modules.reviews.service import ReviewService
from app.modules.reviews.validation import normalize_review_form, validate_review_form
from supabase import Client
from typing import Dict, Optional, Union

router = APIRouter(prefix="/reviews", tags=["reviews"])


class ReviewForm(BaseModel):
    """Raw admin form; checked by validate_review_form before use."""
    name: Optional[str] = None
    city: Optional[str] = None
    desc: Optional[str] = None
    rate: Optional[Union[int, str]] = None


def get_review_service(supabase: Client = Depends(get_supabase)) -> ReviewService:
    return ReviewService(supabase)


def _checked_form(review_form: ReviewForm) -> Dict:
    form = normalize_review_form(review_form.model_dump())
    raise_for_errors(validate_review_form(form))
    return form


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    review_form: ReviewForm,
    user_data: Dict = Depends(require_member),
    service: ReviewService = Depends(get_review_service)
):
    review_data = build_model(ReviewCreate, _checked_form(review_form))
    return service.create_review(review_data, user_data["id"])


@router.get("", response_model=Page[ReviewResponse])
async def list_reviews(
    page: int = 1,
    limit: int = settings.default_page_size,
    user_data: Dict = Depends(require_member),
    service: ReviewService = Depends(get_review_service)
):
    return service.list_reviews(page=page, limit=limit)


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: int,
    user_data: Dict = Depends(require_member),
    service: ReviewService = Depends(get_review_service)
):
    return service.get_review_by_id(review_id)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int,
    review_form: ReviewForm,
    user_data: Dict = Depends(require_member),
    service: ReviewService = Depends(get_review_service)
):
    review_data = build_model(ReviewUpdate, _checked_form(review_form))
    return service.update_review(review_id, review_data)


@router.delete("/{review_id}", status_code=204)
async def delete_review(
    review_id: int,
    user_data: Dict = Depends(require_member),
    service: ReviewService = Depends(get_review_service)
):
    service.delete_review(review_id)
    return None
