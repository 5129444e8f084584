from pydantic import BaseModel


class OverviewResponse(BaseModel):
    cases: int
    reviews: int
    requests: int
