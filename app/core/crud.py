"""
Table helpers shared by the entity services.

Each helper runs a single PostgREST call and wraps any client failure in a
BackendOperationError carrying `<action> <label>` context.
"""
import logging
from typing import Any, Dict, List, Tuple

from supabase import Client

from app.core.errors import BackendOperationError, NotFoundError
from app.core.pagination import page_bounds

logger = logging.getLogger(__name__)


def fetch_page(
    supabase: Client,
    table: str,
    page: int,
    limit: int,
    label: str,
) -> Tuple[List[Dict[str, Any]], int]:
    """Rows for a 1-based page, newest first, with the exact total row count."""
    start, end = page_bounds(page, limit)
    try:
        result = supabase.table(table)\
            .select("*", count="exact")\
            .order("created_at", desc=True)\
            .range(start, end)\
            .execute()
    except Exception as e:
        logger.error(f"Failed to fetch {label}: {str(e)}")
        raise BackendOperationError(f"Failed to fetch {label}: {str(e)}")
    return result.data or [], result.count or 0


def fetch_by_id(supabase: Client, table: str, record_id: Any, label: str) -> Dict[str, Any]:
    try:
        result = supabase.table(table)\
            .select("*")\
            .eq("id", record_id)\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Failed to fetch {label} {record_id}: {str(e)}")
        raise BackendOperationError(f"Failed to fetch {label} by ID: {str(e)}")
    if not result.data:
        raise NotFoundError(f"{label.capitalize()} not found")
    return result.data[0]


def insert_row(supabase: Client, table: str, row: Dict[str, Any], label: str) -> Dict[str, Any]:
    try:
        result = supabase.table(table).insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to create {label}: {str(e)}")
        raise BackendOperationError(f"Failed to create {label}: {str(e)}")
    if not result.data:
        raise BackendOperationError(f"Failed to create {label}")
    return result.data[0]


def update_row(
    supabase: Client,
    table: str,
    record_id: Any,
    values: Dict[str, Any],
    label: str,
) -> Dict[str, Any]:
    try:
        result = supabase.table(table)\
            .update(values)\
            .eq("id", record_id)\
            .execute()
    except Exception as e:
        logger.error(f"Failed to update {label} {record_id}: {str(e)}")
        raise BackendOperationError(f"Failed to update {label}: {str(e)}")
    if not result.data:
        raise NotFoundError(f"{label.capitalize()} not found")
    return result.data[0]


def delete_row(supabase: Client, table: str, record_id: Any, label: str) -> None:
    try:
        supabase.table(table).delete().eq("id", record_id).execute()
    except Exception as e:
        logger.error(f"Failed to delete {label} {record_id}: {str(e)}")
        raise BackendOperationError(f"Failed to delete {label}: {str(e)}")
