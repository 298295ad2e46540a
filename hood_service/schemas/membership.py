# hood_service/schemas/membership.py
from pydantic import BaseModel, model_validator
from typing import Optional
from datetime import date


class TreasurerCreate(BaseModel):
    user_id: str
    association_id: str
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_term(self) -> "TreasurerCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self
