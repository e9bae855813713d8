from pydantic import BaseModel, Field
from typing import List

from app.schemas.event import EventResponseSchema


class DashboardEventSchema(EventResponseSchema):
    attendance_count: int = Field(default=0, alias="attendanceCount")
    comment_count: int = Field(default=0, alias="commentCount")
    average_rating: float = Field(default=0.0, alias="averageRating")
    total_ratings: int = Field(default=0, alias="totalRatings")

    class Config:
        from_attributes = True
        populate_by_name = True

class DashboardResponseSchema(BaseModel):
    total: int
    categories: List[str]
    events: List[DashboardEventSchema]
