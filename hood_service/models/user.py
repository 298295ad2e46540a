# hood_service/models/user.py
import uuid
from sqlalchemy import Column, String, DateTime, Boolean, false, func
from hood_service.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(
        String, primary_key=True, default=lambda: f"usr_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String, nullable=False)
    birthday = Column(DateTime, nullable=True)
    address = Column(String, nullable=True)
    activity = Column(String, nullable=True)
    email = Column(String, nullable=True, unique=True, index=True)
    personal_phone = Column(String, nullable=True)
    commercial_phone = Column(String, nullable=True)
    uses_whatsapp = Column(Boolean, nullable=False, default=False, server_default=false())
    signed_at = Column(DateTime, nullable=True)
    # Identity document numbers, comma separated.
    identities = Column(String, nullable=False, default="", server_default="")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
