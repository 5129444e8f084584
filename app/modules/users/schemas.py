from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from datetime import datetime

Role = Literal["editor", "admin"]


class MemberCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: Role = "editor"


class MemberUpdate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    name: Optional[str] = None
    role: Optional[Role] = None


class MemberResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
