# hood_service/models/field_reservation.py
"""
Field reservation model.

Rows are never removed: deletion sets ``status`` to DELETED and stamps
``deleted_at``. Only ACTIVE rows count for overlap and quota checks. On
PostgreSQL an exclusion constraint (see alembic revision
``b002_reservation_overlap``) rejects overlapping ACTIVE rows per field.
"""

import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, CheckConstraint, func
from sqlalchemy.orm import relationship

from hood_service.db.base_class import Base
from hood_service.constants.reservation import ReservationStatus


class FieldReservation(Base):
    __tablename__ = "field_reservations"

    id = Column(
        String, primary_key=True, default=lambda: f"res_{uuid.uuid4().hex[:12]}"
    )
    field_id = Column(String, ForeignKey("fields.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        String(20), nullable=False, default=ReservationStatus.ACTIVE, server_default=ReservationStatus.ACTIVE
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    field = relationship("Field", back_populates="reservations")

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="check_reservation_interval"),
        CheckConstraint("status IN ('ACTIVE', 'DELETED')", name="check_reservation_status"),
        Index("ix_field_reservations_field_status_start", "field_id", "status", "start_date"),
        Index("ix_field_reservations_user_status_start", "user_id", "status", "start_date"),
    )

    @property
    def deleted(self) -> bool:
        return self.status == ReservationStatus.DELETED
