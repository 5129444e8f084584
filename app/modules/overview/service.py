import logging
from supabase import Client
from app.core.errors import BackendOperationError
from app.modules.overview.schemas import OverviewResponse

logger = logging.getLogger(__name__)


class OverviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def count_rows(self, table: str) -> int:
        try:
            result = self.supabase.table(table)\
                .select("id", count="exact")\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to count {table}: {str(e)}")
            raise BackendOperationError(f"Failed to count {table}: {str(e)}")
        return result.count or 0

    def get_overview(self) -> OverviewResponse:
        return OverviewResponse(
            cases=self.count_rows("cases"),
            reviews=self.count_rows("reviews"),
            requests=self.count_rows("requests"),
        )
