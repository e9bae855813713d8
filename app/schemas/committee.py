from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class CommitteeMemberSchema(BaseModel):
    member_name: Optional[str] = Field(default=None, max_length=100)
    role: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    responsibilities: Optional[str] = Field(default=None, max_length=2000)

class CommitteeMemberResponseSchema(BaseModel):
    member_id: int
    member_name: str
    role: str
    email: Optional[str] = None
    phone: Optional[str] = None
    responsibilities: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class CommitteeMemberEnvelope(BaseModel):
    success: bool = True
    member: CommitteeMemberResponseSchema

class CommitteeListEnvelope(BaseModel):
    success: bool = True
    members: List[CommitteeMemberResponseSchema]

class CommitteeStatsEnvelope(BaseModel):
    success: bool = True
    total_members: int = Field(alias="totalMembers")

class SuccessMessageEnvelope(BaseModel):
    success: bool = True
    message: str
