from pydantic import BaseModel
from typing import Any, List

from app.schemas.category import CategoryResponseSchema


class InterestUpdateSchema(BaseModel):
    categories: Any = None

class InterestSetResponseSchema(BaseModel):
    user_id: str
    categories: List[CategoryResponseSchema]

class InterestSavedResponseSchema(BaseModel):
    user_id: str
    saved: List[int]

class InterestClearedResponseSchema(BaseModel):
    user_id: str
    deleted: bool
