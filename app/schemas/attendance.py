from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class AttendanceSubmitSchema(BaseModel):
    user_name: Optional[str] = Field(default=None, alias="userName", max_length=100)

    class Config:
        populate_by_name = True

class AttendanceResponseSchema(BaseModel):
    attendance_id: int
    event_id: int
    user_name: str
    created_at: datetime

    class Config:
        from_attributes = True

class AttendanceListResponseSchema(BaseModel):
    count: int
    attendees: List[AttendanceResponseSchema]

class AttendanceCheckResponseSchema(BaseModel):
    is_attending: bool = Field(alias="isAttending")
