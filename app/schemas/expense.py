from pydantic import BaseModel, Field
from decimal import Decimal
from datetime import date, datetime
from typing import Optional, List


class ExpenseSchema(BaseModel):
    event_id: Optional[int] = None
    expense_category: Optional[str] = Field(default=None, max_length=100)
    amount: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=2000)
    expense_date: Optional[date] = None

class ExpenseEventSchema(BaseModel):
    event_id: int
    event_title: str

    class Config:
        from_attributes = True

class ExpenseResponseSchema(BaseModel):
    expense_id: int
    event_id: int
    expense_category: str
    amount: Decimal
    description: Optional[str] = None
    expense_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None
    event: Optional[ExpenseEventSchema] = None

    class Config:
        from_attributes = True

class ExpenseEnvelope(BaseModel):
    success: bool = True
    expense: ExpenseResponseSchema

class ExpenseListEnvelope(BaseModel):
    success: bool = True
    expenses: List[ExpenseResponseSchema]

class ExpenseStatsEnvelope(BaseModel):
    success: bool = True
    total_expenses: Decimal = Field(alias="totalExpenses")
    total_count: int = Field(alias="totalCount")

class OrganizerEventListEnvelope(BaseModel):
    success: bool = True
    events: List[ExpenseEventSchema]
