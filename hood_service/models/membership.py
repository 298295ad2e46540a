# hood_service/models/membership.py
"""
Role tables linking users to associations.

- ``UserAssociation``: plain membership (required to book fields)
- ``AssociationAdmin``: may manage fields and grant roles
- ``AssociationTreasurer``: may record transactions while the term is valid
"""

import uuid
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint, func
from hood_service.db.base_class import Base


class UserAssociation(Base):
    __tablename__ = "user_associations"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    association_id = Column(
        String, ForeignKey("associations.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


class AssociationAdmin(Base):
    __tablename__ = "association_admins"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    association_id = Column(
        String, ForeignKey("associations.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


class AssociationTreasurer(Base):
    __tablename__ = "association_treasurers"

    id = Column(
        String, primary_key=True, default=lambda: f"trs_{uuid.uuid4().hex[:12]}"
    )
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    association_id = Column(
        String, ForeignKey("associations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "association_id", "start_date", name="unique_treasurer_term"
        ),
    )
