from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

NOTE_MAX_LENGTH = 1000


class NoteCreate(BaseModel):
    desc: str = Field(default="", max_length=NOTE_MAX_LENGTH)


class NoteResponse(BaseModel):
    id: str
    desc: str
    request_id: str
    creator_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
