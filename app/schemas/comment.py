from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class CommentCreateSchema(BaseModel):
    author_name: Optional[str] = Field(default=None, alias="authorName", max_length=100)
    comment_text: Optional[str] = Field(default=None, alias="commentText", max_length=5000)

    class Config:
        populate_by_name = True

class CommentUpdateSchema(BaseModel):
    comment_text: Optional[str] = Field(default=None, alias="commentText", max_length=5000)

    class Config:
        populate_by_name = True

class CommentResponseSchema(BaseModel):
    id: int
    event_id: int
    author_name: str
    comment_text: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class MessageResponseSchema(BaseModel):
    message: str
