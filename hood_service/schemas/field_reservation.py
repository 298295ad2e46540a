# hood_service/schemas/field_reservation.py
from pydantic import AwareDatetime, BaseModel
from typing import Optional


class FieldReservationCreate(BaseModel):
    field_id: str
    user_id: str
    description: Optional[str] = None
    start_date: AwareDatetime
    end_date: AwareDatetime
