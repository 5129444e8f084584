import math
from typing import Generic, List, Tuple, TypeVar

from pydantic import BaseModel

from app.config import settings
from app.core.errors import FormValidationError

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.limit)


def page_bounds(page: int, limit: int) -> Tuple[int, int]:
    """Inclusive row range for a 1-based page, as used by PostgREST `range()`."""
    errors = {}
    if page < 1:
        errors["page"] = "Page must be 1 or greater"
    if limit < 1 or limit > settings.max_page_size:
        errors["limit"] = f"Limit must be between 1 and {settings.max_page_size}"
    if errors:
        raise FormValidationError(errors)
    offset = (page - 1) * limit
    return offset, offset + limit - 1


def page_count(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
