from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

DESC_MAX_LENGTH = 250

FormType = Literal["normal", "beforeAfter"]


class CaseBase(BaseModel):
    company_name: str
    desc: str = Field(max_length=DESC_MAX_LENGTH)
    city: str
    country: str
    contact_person: str
    form_type: FormType = "normal"


class CaseCreate(CaseBase):
    pass


class CaseUpdate(CaseBase):
    created_at: Optional[datetime] = None


class CaseImages(BaseModel):
    """Raw uploaded files; None means no new file for that slot."""
    image: Optional[bytes] = None
    image_before: Optional[bytes] = None
    image_after: Optional[bytes] = None

    def provided(self) -> dict:
        return {k: v for k, v in self.model_dump().items() if v}


class CaseResponse(BaseModel):
    id: int
    company_name: str
    desc: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    contact_person: Optional[str] = None
    form_type: FormType = "normal"
    image: Optional[str] = None
    image_before: Optional[str] = None
    image_after: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
