# hood_service/schemas/association.py
from pydantic import BaseModel, Field
from typing import Optional


class AssociationCreate(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Vila Madalena Neighbors"})
    neighborhood: str
    country: str = Field(..., json_schema_extra={"example": "BR"})
    state: str = Field(..., json_schema_extra={"example": "SP"})
    address: str
    identity: Optional[str] = None


class AssociationUpdate(BaseModel):
    name: Optional[str] = None
    neighborhood: Optional[str] = None
    address: Optional[str] = None
    identity: Optional[str] = None
