from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
import logging

from app.database import get_db
from app.models.rating import Rating
from app.routes.comments import clean_text
from app.routes.events import get_event_or_404
from app.services.aggregation import EventStatus, summarize_ratings
from app.schemas.rating import (
    RatingSubmitSchema,
    RatingResponseSchema,
    RatingSummaryResponseSchema,
    RatingCheckResponseSchema
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/events",
    tags=["Ratings"]
)

ALREADY_RATED = "You have already rated this event"


@router.post(
    "/{event_id}/rating",
    response_model=RatingResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Rate an event after it has ended"
)
async def submit_rating(
    event_id: int,
    rating_data: RatingSubmitSchema,
    db: AsyncSession = Depends(get_db)
):
    user_name = clean_text(rating_data.user_name)
    if not user_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User name is required")
    if rating_data.rating is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rating must be between 1 and 5")

    event = await get_event_or_404(db, event_id)
    if event.status != EventStatus.ended:
        logger.warning(f"Rating for event ID {event_id} rejected: status is '{event.status.value}'.")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ratings are only accepted after the event has ended"
        )

    existing = await db.execute(
        select(Rating).where(Rating.event_id == event_id, Rating.user_name == user_name)
    )
    if existing.scalars().first():
        logger.warning(f"Duplicate rating for '{user_name}' on event ID {event_id} rejected.")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_RATED)

    db_rating = Rating(event_id=event_id, user_name=user_name, rating=rating_data.rating)
    db.add(db_rating)
    try:
        await db.commit()
        await db.refresh(db_rating)
        logger.info(f"Rating {db_rating.rating} by '{user_name}' recorded for event ID {event_id}")
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError recording rating for '{user_name}' on event ID {event_id}: {str(e_integrity)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_RATED)
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error recording rating on event ID {event_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while submitting the rating."
        )
    return db_rating

@router.get(
    "/{event_id}/rating",
    response_model=RatingSummaryResponseSchema,
    summary="Get the average rating and all ratings for an event"
)
async def get_event_ratings(
    event_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(
            select(Rating)
            .where(Rating.event_id == event_id)
            .order_by(Rating.created_at.desc(), Rating.rating_id.desc())
        )
        ratings = result.scalars().all()
    except Exception as e:
        logger.error(f"Error fetching ratings for event_id {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while fetching ratings for event {event_id}."
        )

    summary = summarize_ratings(r.rating for r in ratings)
    return {
        "averageRating": summary.average_rating,
        "totalRatings": summary.total_ratings,
        "ratings": ratings,
    }

@router.get(
    "/{event_id}/check-rating/{user_name}",
    response_model=RatingCheckResponseSchema,
    summary="Check whether a user has rated an event"
)
async def check_rating(
    event_id: int,
    user_name: str,
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(Rating).where(Rating.event_id == event_id, Rating.user_name == user_name)
    )
    user_rating = result.scalars().first()
    return {
        "hasRated": user_rating is not None,
        "userRating": user_rating.rating if user_rating else None,
    }
