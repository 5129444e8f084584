import logging
from supabase import Client
from app.core.crud import fetch_page, fetch_by_id, insert_row, update_row, delete_row
from app.core.errors import BackendOperationError
from app.core.pagination import Page
from app.modules.reviews.schemas import ReviewCreate, ReviewUpdate, ReviewResponse
from typing import List

logger = logging.getLogger(__name__)

TABLE = "reviews"


class ReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_review(self, review_data: ReviewCreate, creator_id: str) -> ReviewResponse:
        row = {**review_data.model_dump(), "creator": creator_id}
        created = insert_row(self.supabase, TABLE, row, "review")
        logger.info(f"Review {created.get('id')} created by {creator_id}")
        return ReviewResponse(**created)

    def list_reviews(self, page: int = 1, limit: int = 6) -> Page[ReviewResponse]:
        rows, total = fetch_page(self.supabase, TABLE, page, limit, "reviews")
        return Page[ReviewResponse](
            items=[ReviewResponse(**row) for row in rows],
            total=total,
            page=page,
            limit=limit,
        )

    def get_latest_reviews(self, limit: int = 10) -> List[ReviewResponse]:
        """Newest reviews for the public site"""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch latest reviews: {str(e)}")
            raise BackendOperationError(f"Failed to fetch latest reviews: {str(e)}")
        return [ReviewResponse(**row) for row in result.data or []]

    def get_review_by_id(self, review_id: int) -> ReviewResponse:
        return ReviewResponse(**fetch_by_id(self.supabase, TABLE, review_id, "review"))

    def update_review(self, review_id: int, review_data: ReviewUpdate) -> ReviewResponse:
        updated = update_row(self.supabase, TABLE, review_id, review_data.model_dump(), "review")
        return ReviewResponse(**updated)

    def delete_review(self, review_id: int) -> None:
        delete_row(self.supabase, TABLE, review_id, "review")
        logger.info(f"Review {review_id} deleted")
