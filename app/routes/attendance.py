from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
import logging

from app.database import get_db
from app.models.attendance import Attendance
from app.routes.comments import clean_text
from app.routes.events import get_event_or_404
from app.schemas.comment import MessageResponseSchema
from app.schemas.attendance import (
    AttendanceSubmitSchema,
    AttendanceResponseSchema,
    AttendanceListResponseSchema,
    AttendanceCheckResponseSchema
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/events",
    tags=["Attendance"]
)

ALREADY_ATTENDING = "Already marked as attending"


@router.post(
    "/{event_id}/attend",
    response_model=AttendanceResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Mark a user as attending an event"
)
async def mark_attendance(
    event_id: int,
    attendance_data: AttendanceSubmitSchema,
    db: AsyncSession = Depends(get_db)
):
    user_name = clean_text(attendance_data.user_name)
    if not user_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User name is required")

    await get_event_or_404(db, event_id)

    existing = await db.execute(
        select(Attendance).where(Attendance.event_id == event_id, Attendance.user_name == user_name)
    )
    if existing.scalars().first():
        logger.warning(f"Duplicate attendance for '{user_name}' on event ID {event_id} rejected.")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_ATTENDING)

    db_attendance = Attendance(event_id=event_id, user_name=user_name)
    db.add(db_attendance)
    try:
        await db.commit()
        await db.refresh(db_attendance)
        logger.info(f"Attendance ID {db_attendance.attendance_id} recorded for '{user_name}' on event ID {event_id}")
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError recording attendance for '{user_name}' on event ID {event_id}: {str(e_integrity)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_ATTENDING)
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error recording attendance on event ID {event_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while marking attendance."
        )
    return db_attendance

@router.get(
    "/{event_id}/attendance",
    response_model=AttendanceListResponseSchema,
    summary="Get the attendee list and count for an event"
)
async def get_event_attendance(
    event_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(
            select(Attendance)
            .where(Attendance.event_id == event_id)
            .order_by(Attendance.created_at.desc(), Attendance.attendance_id.desc())
        )
        attendees = result.scalars().all()
        return {"count": len(attendees), "attendees": attendees}
    except Exception as e:
        logger.error(f"Error fetching attendance for event_id {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while fetching attendance for event {event_id}."
        )

@router.get(
    "/{event_id}/check-attendance/{user_name}",
    response_model=AttendanceCheckResponseSchema,
    summary="Check whether a user is attending an event"
)
async def check_attendance(
    event_id: int,
    user_name: str,
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(Attendance.attendance_id).where(Attendance.event_id == event_id, Attendance.user_name == user_name)
    )
    return {"isAttending": result.first() is not None}

@router.delete(
    "/{event_id}/attend",
    response_model=MessageResponseSchema,
    summary="Remove a user's attendance from an event"
)
async def remove_attendance(
    event_id: int,
    attendance_data: AttendanceSubmitSchema,
    db: AsyncSession = Depends(get_db)
):
    user_name = clean_text(attendance_data.user_name)
    if not user_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User name is required")

    try:
        result = await db.execute(
            delete(Attendance).where(Attendance.event_id == event_id, Attendance.user_name == user_name)
        )
        await db.commit()
        logger.info(f"Removed {result.rowcount} attendance row(s) for '{user_name}' on event ID {event_id}")
        return {"message": "Attendance removed successfully"}
    except Exception as e:
        await db.rollback()
        logger.error(f"Error removing attendance on event ID {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while removing attendance."
        )
