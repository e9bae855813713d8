from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing_extensions import Annotated
from typing import Optional, List

class RatingSubmitSchema(BaseModel):
    user_name: Optional[str] = Field(default=None, alias="userName", max_length=100)
    rating: Optional[Annotated[int, Field(ge=1, le=5)]] = None

    class Config:
        populate_by_name = True

    @field_validator("rating", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        # bool is an int subclass; JSON true would otherwise count as one star.
        if isinstance(value, bool):
            raise ValueError("Rating must be an integer between 1 and 5")
        return value

class RatingResponseSchema(BaseModel):
    rating_id: int
    event_id: int
    user_name: str
    rating: int
    created_at: datetime

    class Config:
        from_attributes = True

class RatingSummaryResponseSchema(BaseModel):
    average_rating: float = Field(alias="averageRating")
    total_ratings: int = Field(alias="totalRatings")
    ratings: List[RatingResponseSchema]

class RatingCheckResponseSchema(BaseModel):
    has_rated: bool = Field(alias="hasRated")
    user_rating: Optional[int] = Field(alias="userRating")
