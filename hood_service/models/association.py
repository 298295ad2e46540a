# hood_service/models/association.py
import uuid
from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship
from hood_service.db.base_class import Base


class Association(Base):
    __tablename__ = "associations"

    id = Column(
        String, primary_key=True, default=lambda: f"asc_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String, nullable=False)
    neighborhood = Column(String, nullable=False)
    country = Column(String, nullable=False)
    state = Column(String, nullable=False)
    address = Column(String, nullable=False)
    identity = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    fields = relationship("Field", back_populates="association")
