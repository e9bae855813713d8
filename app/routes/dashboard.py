from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from collections import defaultdict
from datetime import datetime, timezone
from typing import List, Optional
import logging

from app.database import get_db
from app.models.attendance import Attendance
from app.models.comment import Comment
from app.models.event import Event
from app.models.rating import Rating
from app.schemas.dashboard import DashboardResponseSchema
from app.schemas.event import EventResponseSchema
from app.services.aggregation import EventStatus, summarize_ratings
from app.services.dashboard import category_names, filter_events, sort_events

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"]
)


async def count_by_event(db: AsyncSession, column) -> dict:
    result = await db.execute(select(column, func.count()).group_by(column))
    return {event_id: count for event_id, count in result.all()}


@router.get(
    "",
    response_model=DashboardResponseSchema,
    summary="Events as the dashboard shows them: filtered, searched and ordered by status"
)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = None,
    category: List[str] = Query(default=[]),
    event_status: Optional[EventStatus] = Query(default=None, alias="status"),
    saved: List[int] = Query(default=[])
):
    try:
        result = await db.execute(select(Event).order_by(Event.start_time.asc()))
        events = result.scalars().all()

        attendance_counts = await count_by_event(db, Attendance.event_id)
        comment_counts = await count_by_event(db, Comment.event_id)
        ratings_by_event = defaultdict(list)
        rating_rows = await db.execute(select(Rating.event_id, Rating.rating))
        for event_id, rating in rating_rows.all():
            ratings_by_event[event_id].append(rating)
    except Exception as e:
        logger.error(f"Error building dashboard: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while loading the dashboard."
        )

    now = datetime.now(timezone.utc)
    visible = sort_events(filter_events(
        events,
        search=search,
        categories=category,
        status=event_status,
        saved=saved,
        now=now,
    ), now=now)

    entries = []
    for event in visible:
        summary = summarize_ratings(ratings_by_event.get(event.event_id, []))
        entry = EventResponseSchema.model_validate(event).model_dump()
        entry.update({
            "attendanceCount": attendance_counts.get(event.event_id, 0),
            "commentCount": comment_counts.get(event.event_id, 0),
            "averageRating": summary.average_rating,
            "totalRatings": summary.total_ratings,
        })
        entries.append(entry)

    return {
        "total": len(entries),
        "categories": category_names(events),
        "events": entries,
    }
