from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
import logging

from app.database import get_db
from app.models.category import Category
from app.schemas.category import CategoryResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/categories",
    tags=["Categories"]
)

@router.get(
    "",
    summary="Get all categories",
    response_model=List[CategoryResponseSchema]
)
async def get_all_categories(
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(select(Category).order_by(Category.category_id))
        categories = result.scalars().all()
        return categories
    except Exception as e:
        logger.error(f"Error fetching categories: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching categories."
        )
