from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
from typing import List
import logging

from app.database import get_db
from app.models.category import Category
from app.models.interest import InterestedCategory
from app.auth.anonymous import AnonymousIdentity, get_anonymous_identity
from app.schemas.category import CategoryResponseSchema
from app.schemas.interest import (
    InterestUpdateSchema,
    InterestSetResponseSchema,
    InterestSavedResponseSchema,
    InterestClearedResponseSchema
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/interests",
    tags=["Interests"]
)


def dedupe_category_ids(raw_categories) -> List[int]:
    """
    Set semantics over the integer value of each id, first occurrence kept,
    so "2" and "02" name the same category.
    Anything that is not a list counts as an empty selection.
    """
    if not isinstance(raw_categories, list):
        return []
    unique_ids: List[int] = []
    for value in raw_categories:
        try:
            category_id = int(str(value).strip())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category ids must be integers"
            )
        if category_id not in unique_ids:
            unique_ids.append(category_id)
    return unique_ids


@router.get(
    "/me",
    response_model=InterestSetResponseSchema,
    summary="Get the interest set of the cookie-identified user"
)
async def get_my_interests(
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(
            select(Category)
            .join(InterestedCategory, InterestedCategory.category_id == Category.category_id)
            .where(InterestedCategory.user_id == identity.user_id)
            .order_by(Category.category_id)
        )
        return {"user_id": identity.user_id, "categories": result.scalars().all()}
    except Exception as e:
        logger.error(f"Error fetching interests for user {identity.user_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching interests."
        )

@router.post(
    "/me",
    response_model=InterestSavedResponseSchema,
    summary="Replace the interest set of the cookie-identified user"
)
async def replace_my_interests(
    interest_data: InterestUpdateSchema,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    db: AsyncSession = Depends(get_db)
):
    category_ids = dedupe_category_ids(interest_data.categories)

    if category_ids:
        known = await db.execute(select(Category.category_id).where(Category.category_id.in_(category_ids)))
        missing = set(category_ids) - set(known.scalars().all())
        if missing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown category ids: {sorted(missing)}"
            )

    # Delete and insert share one transaction; a failed insert leaves the old set in place.
    try:
        await db.execute(delete(InterestedCategory).where(InterestedCategory.user_id == identity.user_id))
        db.add_all([
            InterestedCategory(user_id=identity.user_id, category_id=category_id)
            for category_id in category_ids
        ])
        await db.commit()
        logger.info(f"Interests for user {identity.user_id} replaced with {category_ids}")
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError replacing interests for user {identity.user_id}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not save interests due to a data conflict."
        )
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error replacing interests for user {identity.user_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Interests could not be saved; the previous selection was kept."
        )
    return {"user_id": identity.user_id, "saved": category_ids}

@router.delete(
    "/me",
    response_model=InterestClearedResponseSchema,
    summary="Clear the interest set of the cookie-identified user"
)
async def clear_my_interests(
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    db: AsyncSession = Depends(get_db)
):
    try:
        await db.execute(delete(InterestedCategory).where(InterestedCategory.user_id == identity.user_id))
        await db.commit()
        logger.info(f"Interests cleared for user {identity.user_id}")
        return {"user_id": identity.user_id, "deleted": True}
    except Exception as e:
        await db.rollback()
        logger.error(f"Error clearing interests for user {identity.user_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while clearing interests."
        )

@router.get(
    "/categories",
    response_model=List[CategoryResponseSchema],
    summary="Get all categories available for interests"
)
async def get_interest_categories(
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(select(Category).order_by(Category.category_name.asc()))
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error fetching categories: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching categories."
        )
