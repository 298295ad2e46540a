# hood_service/models/field.py
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, Numeric, ForeignKey, false, func
from sqlalchemy.orm import relationship
from hood_service.db.base_class import Base


class Field(Base):
    """A reservable resource of an association (court, pitch, barbecue area)."""

    __tablename__ = "fields"

    id = Column(
        String, primary_key=True, default=lambda: f"fld_{uuid.uuid4().hex[:12]}"
    )
    association_id = Column(
        String, ForeignKey("associations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    # Serialized ReservationRules; NULL means the field is unrestricted.
    reservation_rules = Column(Text, nullable=True)
    latitude = Column(Numeric(9, 6), nullable=False)
    longitude = Column(Numeric(9, 6), nullable=False)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    association = relationship("Association", back_populates="fields")
    reservations = relationship("FieldReservation", back_populates="field")
