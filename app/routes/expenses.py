from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete, func
from datetime import date, datetime, timezone
from decimal import Decimal
import logging

from app.database import get_db
from app.models.event import Event
from app.models.expense import Expense
from app.auth.dependencies import get_current_organizer_user
from app.routes.committee import optional_text
from app.routes.events import get_event_or_404
from app.schemas.committee import SuccessMessageEnvelope
from app.schemas.expense import (
    ExpenseSchema,
    ExpenseEnvelope,
    ExpenseListEnvelope,
    ExpenseStatsEnvelope,
    OrganizerEventListEnvelope
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/organizer",
    tags=["Organizer"],
    dependencies=[Depends(get_current_organizer_user)]
)


async def validated_expense_fields(db: AsyncSession, expense_data: ExpenseSchema) -> dict:
    expense_category = optional_text(expense_data.expense_category)
    if not expense_data.event_id or not expense_category or not expense_data.amount:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Event, category, and amount are required"
        )
    if expense_data.amount < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Amount must be a positive number"
        )
    await get_event_or_404(db, expense_data.event_id)
    return {
        "event_id": expense_data.event_id,
        "expense_category": expense_category,
        "amount": expense_data.amount,
        "description": optional_text(expense_data.description),
    }


@router.get(
    "/expenses",
    response_model=ExpenseListEnvelope,
    summary="List expenses with their event (Organizer only)"
)
async def get_expenses(
    db: AsyncSession = Depends(get_db)
):
    try:
        result = await db.execute(
            select(Expense).order_by(Expense.expense_date.desc(), Expense.expense_id.desc())
        )
        expenses = result.scalars().unique().all()
        logger.info(f"Found {len(expenses)} expenses")
        return {"success": True, "expenses": expenses}
    except Exception as e:
        logger.error(f"Error fetching expenses: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching expenses."
        )

@router.get(
    "/expenses/stats",
    response_model=ExpenseStatsEnvelope,
    summary="Total amount and count of expenses (Organizer only)"
)
async def get_expense_stats(
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(func.sum(Expense.amount), func.count(Expense.expense_id)))
    total_amount, total_count = result.one()
    return {
        "success": True,
        "totalExpenses": Decimal(total_amount or 0),
        "totalCount": int(total_count or 0),
    }

@router.post(
    "/expenses",
    response_model=ExpenseEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Record an expense against an event (Organizer only)"
)
async def create_expense(
    expense_data: ExpenseSchema,
    db: AsyncSession = Depends(get_db)
):
    fields = await validated_expense_fields(db, expense_data)
    db_expense = Expense(
        **fields,
        expense_date=expense_data.expense_date or date.today()
    )
    db.add(db_expense)
    try:
        await db.commit()
        await db.refresh(db_expense)
        await db.refresh(db_expense, attribute_names=["event"])
        logger.info(f"Expense ID {db_expense.expense_id} of {db_expense.amount} added for event ID {db_expense.event_id}")
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError adding expense {expense_data.model_dump()}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not add expense due to a data conflict."
        )
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error adding expense: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while adding the expense."
        )
    return {"success": True, "expense": db_expense}

@router.put(
    "/expenses/{expense_id}",
    response_model=ExpenseEnvelope,
    summary="Update an expense (Organizer only)"
)
async def update_expense(
    expense_id: int,
    expense_data: ExpenseSchema,
    db: AsyncSession = Depends(get_db)
):
    db_expense = await db.get(Expense, expense_id)
    if not db_expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    fields = await validated_expense_fields(db, expense_data)
    try:
        for key, value in fields.items():
            setattr(db_expense, key, value)
        if expense_data.expense_date:
            db_expense.expense_date = expense_data.expense_date
        db_expense.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(db_expense)
        await db.refresh(db_expense, attribute_names=["event"])
        logger.info(f"Expense ID {expense_id} updated")
        return {"success": True, "expense": db_expense}
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error updating expense ID {expense_id}: {str(e_general)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred while updating expense {expense_id}."
        )

@router.delete(
    "/expenses/{expense_id}",
    response_model=SuccessMessageEnvelope,
    summary="Delete an expense (Organizer only)"
)
async def delete_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_db)
):
    try:
        await db.execute(delete(Expense).where(Expense.expense_id == expense_id))
        await db.commit()
        logger.info(f"Expense ID {expense_id} deleted")
        return {"success": True, "message": "Expense deleted successfully"}
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting expense ID {expense_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while deleting expense {expense_id}."
        )

@router.get(
    "/events",
    response_model=OrganizerEventListEnvelope,
    summary="Event ids and titles for the expense form (Organizer only)"
)
async def get_events_for_dropdown(
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(Event.event_id, Event.event_title).order_by(Event.event_title))
    events = [{"event_id": row.event_id, "event_title": row.event_title} for row in result.all()]
    return {"success": True, "events": events}
