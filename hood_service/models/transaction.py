# hood_service/models/transaction.py
import uuid
from sqlalchemy import Column, String, Date, DateTime, Boolean, Numeric, ForeignKey, false, func
from hood_service.db.base_class import Base


class Transaction(Base):
    """A revenue (positive amount) or expense (negative amount) of an association."""

    __tablename__ = "transactions"

    id = Column(
        String, primary_key=True, default=lambda: f"txn_{uuid.uuid4().hex[:12]}"
    )
    association_id = Column(
        String, ForeignKey("associations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    creator_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    details = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    reference_date = Column(Date, nullable=False)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
