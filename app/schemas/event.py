from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from app.schemas.category import CategoryResponseSchema
from app.services.aggregation import EventStatus


class EventResponseSchema(BaseModel):
    event_id: int
    event_title: str
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    description: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    categories: List[CategoryResponseSchema] = Field(default_factory=list)
    status: EventStatus

    class Config:
        from_attributes = True

class EventStatusResponseSchema(BaseModel):
    event_id: int
    status: EventStatus
