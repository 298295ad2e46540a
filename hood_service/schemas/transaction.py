# hood_service/schemas/transaction.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
from decimal import Decimal


class TransactionCreate(BaseModel):
    association_id: str
    details: str = Field(..., min_length=1, json_schema_extra={"example": "Monthly dues"})
    # Positive for revenue, negative for expenses.
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    reference_date: date


class TransactionUpdate(BaseModel):
    details: Optional[str] = None
    amount: Optional[Decimal] = None
    reference_date: Optional[date] = None
