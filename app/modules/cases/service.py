import logging
from supabase import Client
from app.core.crud import fetch_page, fetch_by_id, insert_row, update_row, delete_row
from app.core.image_storage import ImageStorage
from app.core.pagination import Page
from app.modules.cases.schemas import CaseCreate, CaseUpdate, CaseImages, CaseResponse
from typing import Optional

logger = logging.getLogger(__name__)

TABLE = "cases"


class CaseService:
    def __init__(self, supabase: Client, storage: Optional[ImageStorage] = None):
        self.supabase = supabase
        self.storage = storage or ImageStorage(supabase)

    def _upload_images(self, images: Optional[CaseImages], user_id: str) -> dict:
        """Upload every provided file; returns column -> public URL."""
        if images is None:
            return {}
        return {
            column: self.storage.upload_image(content, user_id)
            for column, content in images.provided().items()
        }

    def create_case(self, case_data: CaseCreate, creator_id: str, images: Optional[CaseImages] = None) -> CaseResponse:
        """Create a case, uploading images first. A failed insert leaves uploaded images in storage."""
        urls = self._upload_images(images, creator_id)
        row = {
            **case_data.model_dump(),
            "image": urls.get("image"),
            "image_before": urls.get("image_before"),
            "image_after": urls.get("image_after"),
            "creator_id": creator_id,
        }
        created = insert_row(self.supabase, TABLE, row, "case")
        logger.info(f"Case {created.get('id')} created by {creator_id}")
        return CaseResponse(**created)

    def list_cases(self, page: int = 1, limit: int = 6) -> Page[CaseResponse]:
        rows, total = fetch_page(self.supabase, TABLE, page, limit, "cases")
        return Page[CaseResponse](
            items=[CaseResponse(**row) for row in rows],
            total=total,
            page=page,
            limit=limit,
        )

    def get_case_by_id(self, case_id: int) -> CaseResponse:
        return CaseResponse(**fetch_by_id(self.supabase, TABLE, case_id, "case"))

    def update_case(
        self,
        case_id: int,
        case_data: CaseUpdate,
        user_id: str,
        images: Optional[CaseImages] = None
    ) -> CaseResponse:
        """Update a case; image columns only change when a new file is supplied."""
        existing = self.get_case_by_id(case_id)
        urls = self._upload_images(images, user_id)
        values = case_data.model_dump(exclude={"created_at"})
        if case_data.created_at is not None:
            values["created_at"] = case_data.created_at.isoformat()
        for column in ("image", "image_before", "image_after"):
            values[column] = urls.get(column, getattr(existing, column))
        updated = update_row(self.supabase, TABLE, case_id, values, "case")
        logger.info(f"Case {case_id} updated by {user_id}")
        return CaseResponse(**updated)

    def delete_case(self, case_id: int) -> None:
        delete_row(self.supabase, TABLE, case_id, "case")
        logger.info(f"Case {case_id} deleted")
