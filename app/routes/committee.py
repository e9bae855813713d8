from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from typing import Optional
import logging

from app.database import get_db
from app.models.committee import CommitteeMember
from app.auth.dependencies import get_current_organizer_user
from app.schemas.committee import (
    CommitteeMemberSchema,
    CommitteeMemberEnvelope,
    CommitteeListEnvelope,
    CommitteeStatsEnvelope,
    SuccessMessageEnvelope
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/organizer/committee",
    tags=["Organizer"],
    dependencies=[Depends(get_current_organizer_user)]
)


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validated_member_fields(member_data: CommitteeMemberSchema) -> dict:
    member_name = optional_text(member_data.member_name)
    role = optional_text(member_data.role)
    if not member_name or not role:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Member name and role are required"
        )
    return {
        "member_name": member_name,
        "role": role,
        "email": optional_text(member_data.email),
        "phone": optional_text(member_data.phone),
        "responsibilities": optional_text(member_data.responsibilities),
    }


@router.get(
    "",
    response_model=CommitteeListEnvelope,
    summary="List committee members (Organizer only)"
)
async def get_committee_members(
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(select(CommitteeMember).order_by(CommitteeMember.member_id.asc()))
        members = result.scalars().all()
        logger.info(f"Found {len(members)} committee members")
        return {"success": True, "members": members}
    except Exception as e:
        logger.error(f"Error fetching committee: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching committee members."
        )

@router.get(
    "/stats",
    response_model=CommitteeStatsEnvelope,
    summary="Count committee members (Organizer only)"
)
async def get_committee_stats(
    db: AsyncSession = Depends(get_db)
):
    total = await db.scalar(select(func.count(CommitteeMember.member_id)))
    return {"success": True, "totalMembers": int(total or 0)}

@router.post(
    "",
    response_model=CommitteeMemberEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add a committee member (Organizer only)"
)
async def create_committee_member(
    member_data: CommitteeMemberSchema,
    db: AsyncSession = Depends(get_db)
):
    db_member = CommitteeMember(**validated_member_fields(member_data))
    db.add(db_member)
    try:
        await db.commit()
        await db.refresh(db_member)
        logger.info(f"Committee member '{db_member.member_name}' added with ID {db_member.member_id}")
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error adding committee member: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while adding the committee member."
        )
    return {"success": True, "member": db_member}

@router.put(
    "/{member_id}",
    response_model=CommitteeMemberEnvelope,
    summary="Update a committee member (Organizer only)"
)
async def update_committee_member(
    member_id: int,
    member_data: CommitteeMemberSchema,
    db: AsyncSession = Depends(get_db)
):
    fields = validated_member_fields(member_data)
    db_member = await db.get(CommitteeMember, member_id)
    if not db_member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Committee member not found"
        )
    try:
        for key, value in fields.items():
            setattr(db_member, key, value)
        await db.commit()
        await db.refresh(db_member)
        logger.info(f"Committee member ID {member_id} updated")
        return {"success": True, "member": db_member}
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error updating committee member ID {member_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred while updating committee member {member_id}."
        )

@router.delete(
    "/{member_id}",
    response_model=SuccessMessageEnvelope,
    summary="Delete a committee member (Organizer only)"
)
async def delete_committee_member(
    member_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        await db.execute(delete(CommitteeMember).where(CommitteeMember.member_id == member_id))
        await db.commit()
        logger.info(f"Committee member ID {member_id} deleted")
        return {"success": True, "message": "Committee member deleted successfully"}
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting committee member ID {member_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while deleting committee member {member_id}."
        )
