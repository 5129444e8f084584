from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

MESSAGE_MAX_LENGTH = 200

TASK_CATEGORIES = (
    "Website",
    "Web App",
    "3D Visualization",
    "Branding",
    "Social Media Content",
    "Other",
)


class RequestCreate(BaseModel):
    name: str
    mobile: str
    mail: EmailStr
    category: str
    consent: bool
    message: str = Field(default="", max_length=MESSAGE_MAX_LENGTH)
    address: Optional[str] = None
    city: Optional[str] = None


class RequestUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    mobile: Optional[str] = None
    mail: Optional[EmailStr] = None
    message: Optional[str] = Field(default=None, max_length=MESSAGE_MAX_LENGTH)
    address: Optional[str] = None
    city: Optional[str] = None


class RequestResponse(BaseModel):
    id: str
    name: str
    mobile: Optional[str] = None
    mail: Optional[str] = None
    category: Optional[str] = None
    consent: bool = False
    message: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class OfferSubmitted(BaseModel):
    id: str
    message: str = "Your request has been sent."
    email_sent: bool
