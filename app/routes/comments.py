from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
from datetime import datetime, timezone
from typing import List, Optional
import logging

from app.database import get_db
from app.models.comment import Comment
from app.routes.events import get_event_or_404
from app.schemas.comment import (
    CommentCreateSchema,
    CommentUpdateSchema,
    CommentResponseSchema,
    MessageResponseSchema
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Comments"]
)

# Edit and delete carry no author check: anyone holding a comment id may change it.


def clean_text(value: Optional[str]) -> str:
    return value.strip() if value else ""


@router.get(
    "/events/{event_id}/comments",
    response_model=List[CommentResponseSchema],
    summary="Get all comments for an event, newest first"
)
async def get_event_comments(
    event_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(
            select(Comment)
            .where(Comment.event_id == event_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error fetching comments for event_id {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while fetching comments for event {event_id}."
        )

@router.post(
    "/events/{event_id}/comments",
    response_model=CommentResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to an event"
)
async def create_comment(
    event_id: int,
    comment_data: CommentCreateSchema,
    db: AsyncSession = Depends(get_db)
):
    author_name = clean_text(comment_data.author_name)
    comment_text = clean_text(comment_data.comment_text)
    if not author_name or not comment_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Author name and comment text are required"
        )

    await get_event_or_404(db, event_id)

    db_comment = Comment(
        event_id=event_id,
        author_name=author_name,
        comment_text=comment_text
    )
    db.add(db_comment)
    try:
        await db.commit()
        await db.refresh(db_comment)
        logger.info(f"Comment ID {db_comment.id} created by '{author_name}' for event ID {event_id}")
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError creating comment for event ID {event_id}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create comment due to a data conflict."
        )
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error creating comment for event ID {event_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while adding the comment."
        )
    return db_comment

@router.put(
    "/comments/{comment_id}",
    response_model=CommentResponseSchema,
    summary="Edit a comment's text"
)
async def update_comment(
    comment_id: int,
    comment_update_data: CommentUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    comment_text = clean_text(comment_update_data.comment_text)
    if not comment_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment text is required"
        )

    db_comment = await db.get(Comment, comment_id)
    if not db_comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comment with id {comment_id} not found."
        )

    try:
        db_comment.comment_text = comment_text
        db_comment.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(db_comment)
        logger.info(f"Comment ID {comment_id} updated.")
        return db_comment
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error updating comment id {comment_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred while updating comment {comment_id}."
        )

@router.delete(
    "/comments/{comment_id}",
    response_model=MessageResponseSchema,
    summary="Delete a comment"
)
async def delete_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(delete(Comment).where(Comment.id == comment_id))
        await db.commit()
        logger.info(f"Delete for comment ID {comment_id} removed {result.rowcount} row(s).")
        return {"message": "Comment deleted successfully"}
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting comment with id {comment_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while deleting comment {comment_id}."
        )
