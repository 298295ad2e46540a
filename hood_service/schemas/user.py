# hood_service/schemas/user.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserCreate(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Maria Souza"})
    birthday: Optional[datetime] = None
    address: Optional[str] = None
    activity: Optional[str] = None
    email: Optional[str] = Field(None, json_schema_extra={"example": "maria@example.com"})
    personal_phone: Optional[str] = None
    commercial_phone: Optional[str] = None
    uses_whatsapp: bool = False
    signed_at: Optional[datetime] = None
    identities: str = ""


class UserUpdate(BaseModel):
    name: Optional[str] = None
    birthday: Optional[datetime] = None
    address: Optional[str] = None
    activity: Optional[str] = None
    personal_phone: Optional[str] = None
    commercial_phone: Optional[str] = None
    uses_whatsapp: Optional[bool] = None
    identities: Optional[str] = None
