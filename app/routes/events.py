from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
import logging

from app.database import get_db
from app.models.event import Event
from app.schemas.event import EventResponseSchema, EventStatusResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/events",
    tags=["Events"]
)


async def get_event_or_404(db: AsyncSession, event_id: int) -> Event:
    event = await db.get(Event, event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event with id {event_id} not found."
        )
    return event


@router.get(
    "",
    response_model=List[EventResponseSchema],
    summary="Get all events with their categories"
)
async def get_all_events(
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(select(Event).order_by(Event.start_time.asc()))
        events = result.scalars().all()
        return events
    except Exception as e:
        logger.error(f"Error fetching events: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching events."
        )

@router.get(
    "/{event_id}",
    response_model=EventResponseSchema,
    summary="Get a specific event by ID"
)
async def get_event_by_id(
    event_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await get_event_or_404(db, event_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching event with id {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while fetching event {event_id}."
        )

@router.get(
    "/{event_id}/status",
    response_model=EventStatusResponseSchema,
    summary="Get the temporal status of an event"
)
async def get_event_status(
    event_id: int,
    db: AsyncSession = Depends(get_db)
):
    event = await get_event_or_404(db, event_id)
    return {"event_id": event.event_id, "status": event.status}
