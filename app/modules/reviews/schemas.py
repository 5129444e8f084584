from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

DESC_MAX_LENGTH = 100
MIN_RATE = 1
MAX_RATE = 5


class ReviewBase(BaseModel):
    name: str
    city: str
    desc: str = Field(max_length=DESC_MAX_LENGTH)
    rate: int = Field(ge=MIN_RATE, le=MAX_RATE)


class ReviewCreate(ReviewBase):
    pass


class ReviewUpdate(ReviewBase):
    pass


class ReviewResponse(BaseModel):
    id: int
    name: str
    city: Optional[str] = None
    desc: Optional[str] = None
    rate: int
    creator: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
