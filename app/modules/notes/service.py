import logging
from supabase import Client
from app.core.crud import fetch_by_id, insert_row, delete_row
from app.core.errors import BackendOperationError, FormValidationError
from app.modules.notes.schemas import NoteCreate, NoteResponse
from typing import List

logger = logging.getLogger(__name__)

TABLE = "notes"


class NoteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_note(self, request_id: str, note_data: NoteCreate, creator_id: str) -> NoteResponse:
        """Append a note to a request and return the stored note"""
        desc = note_data.desc.strip()
        if not desc:
            raise FormValidationError({"desc": "Note is required"})
        fetch_by_id(self.supabase, "requests", request_id, "request")
        created = insert_row(self.supabase, TABLE, {
            "desc": desc,
            "request_id": request_id,
            "creator_id": creator_id,
        }, "request note")
        return NoteResponse(**created)

    def list_notes(self, request_id: str) -> List[NoteResponse]:
        """Notes for a request, oldest first"""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("request_id", request_id)\
                .order("created_at")\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch notes for request {request_id}: {str(e)}")
            raise BackendOperationError(f"Failed to fetch notes: {str(e)}")
        return [NoteResponse(**row) for row in result.data or []]

    def delete_note(self, note_id: str) -> None:
        delete_row(self.supabase, TABLE, note_id, "request note")
