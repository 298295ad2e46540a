# hood_service/schemas/field.py
from pydantic import BaseModel, Field as PydanticField, field_validator
from typing import Optional
from decimal import Decimal

from hood_service.reservations.rules import parse_rules


class FieldCreate(BaseModel):
    association_id: str
    name: str = PydanticField(..., json_schema_extra={"example": "Beach tennis court"})
    description: Optional[str] = None
    # Serialized ReservationRules, or None for an unrestricted field.
    reservation_rules: Optional[str] = None
    latitude: Decimal = PydanticField(..., ge=-90, le=90)
    longitude: Decimal = PydanticField(..., ge=-180, le=180)

    @field_validator("reservation_rules")
    @classmethod
    def normalize_rules(cls, value: Optional[str]) -> Optional[str]:
        # Stored in canonical form so the blob always round-trips.
        rules = parse_rules(value)
        return rules.to_json() if rules is not None else None


class FieldUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    reservation_rules: Optional[str] = None
    latitude: Optional[Decimal] = PydanticField(None, ge=-90, le=90)
    longitude: Optional[Decimal] = PydanticField(None, ge=-180, le=180)
    deleted: Optional[bool] = None

    @field_validator("reservation_rules")
    @classmethod
    def normalize_rules(cls, value: Optional[str]) -> Optional[str]:
        rules = parse_rules(value)
        return rules.to_json() if rules is not None else None
