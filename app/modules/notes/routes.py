from fastapi import APIRouter, Depends
from app.core.dependencies import require_member
from app.database.supabase_client import get_supabase
from app.modules.notes.schemas import NoteCreate, NoteResponse
from app.modules.notes.service import NoteService
from supabase import Client
from typing import Dict, List

router = APIRouter(tags=["notes"])


def get_note_service(supabase: Client = Depends(get_supabase)) -> NoteService:
    return NoteService(supabase)


@router.post("/requests/{request_id}/notes", response_model=NoteResponse, status_code=201)
async def create_note(
    request_id: str,
    note_data: NoteCreate,
    user_data: Dict = Depends(require_member),
    service: NoteService = Depends(get_note_service)
):
    return service.create_note(request_id, note_data, user_data["id"])


@router.get("/requests/{request_id}/notes", response_model=List[NoteResponse])
async def list_notes(
    request_id: str,
    user_data: Dict = Depends(require_member),
    service: NoteService = Depends(get_note_service)
):
    return service.list_notes(request_id)


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(
    note_id: str,
    user_data: Dict = Depends(require_member),
    service: NoteService = Depends(get_note_service)
):
    service.delete_note(note_id)
    return None
