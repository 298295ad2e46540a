# hood_service/crud/crud_relations.py
"""
Role oracle for associations.

Answers "does user X hold role R in association A?" and records new
memberships, admins and treasurer terms.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from hood_service.constants.roles import Role
from hood_service.models.membership import (
    AssociationAdmin,
    AssociationTreasurer,
    UserAssociation,
)
from hood_service.models.user import User
from hood_service.schemas.membership import TreasurerCreate

logger = logging.getLogger(__name__)


class CRUDRelations:
    """Membership and role lookups."""

    def create_user_association(
        self, db: Session, *, user_id: str, association_id: str
    ) -> UserAssociation:
        """Add ``user_id`` as a member; joining twice returns the existing row."""
        existing = self.get_membership(db, user_id=user_id, association_id=association_id)
        if existing:
            return existing
        membership = UserAssociation(user_id=user_id, association_id=association_id)
        db.add(membership)
        db.commit()
        db.refresh(membership)
        logger.info(f"User {user_id} joined association {association_id}")
        return membership

    def create_admin(
        self, db: Session, *, user_id: str, association_id: str
    ) -> AssociationAdmin:
        existing = (
            db.query(AssociationAdmin)
            .filter(
                AssociationAdmin.user_id == user_id,
                AssociationAdmin.association_id == association_id,
            )
            .first()
        )
        if existing:
            return existing
        admin = AssociationAdmin(user_id=user_id, association_id=association_id)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info(f"User {user_id} is now admin of association {association_id}")
        return admin

    def create_treasurer(
        self, db: Session, *, obj_in: TreasurerCreate
    ) -> AssociationTreasurer:
        treasurer = AssociationTreasurer(**obj_in.model_dump())
        db.add(treasurer)
        db.commit()
        db.refresh(treasurer)
        logger.info(
            f"User {obj_in.user_id} is treasurer of association {obj_in.association_id} "
            f"from {obj_in.start_date} to {obj_in.end_date or 'open-ended'}"
        )
        return treasurer

    def get_membership(
        self, db: Session, *, user_id: str, association_id: str
    ) -> Optional[UserAssociation]:
        return db.query(UserAssociation).filter(
            and_(
                UserAssociation.user_id == user_id,
                UserAssociation.association_id == association_id,
            )
        ).first()

    def is_member(self, db: Session, *, user_id: str, association_id: str) -> bool:
        return self.get_membership(db, user_id=user_id, association_id=association_id) is not None

    def is_admin(self, db: Session, *, user_id: str, association_id: str) -> bool:
        return db.query(AssociationAdmin.user_id).filter(
            and_(
                AssociationAdmin.user_id == user_id,
                AssociationAdmin.association_id == association_id,
            )
        ).first() is not None

    def is_treasurer(
        self,
        db: Session,
        *,
        user_id: str,
        association_id: str,
        on_date: Optional[date] = None,
    ) -> bool:
        """A treasurer term covers ``on_date`` when start <= day <= end (end may be open)."""
        query = db.query(AssociationTreasurer.id).filter(
            AssociationTreasurer.user_id == user_id,
            AssociationTreasurer.association_id == association_id,
        )
        if on_date is not None:
            query = query.filter(
                AssociationTreasurer.start_date <= on_date,
                or_(
                    AssociationTreasurer.end_date.is_(None),
                    AssociationTreasurer.end_date >= on_date,
                ),
            )
        return query.first() is not None

    def has_role(
        self,
        db: Session,
        *,
        user_id: str,
        association_id: str,
        role: Role,
        on_date: Optional[date] = None,
    ) -> bool:
        if role == Role.ADMIN:
            return self.is_admin(db, user_id=user_id, association_id=association_id)
        if role == Role.TREASURER:
            return self.is_treasurer(
                db, user_id=user_id, association_id=association_id, on_date=on_date
            )
        return self.is_member(db, user_id=user_id, association_id=association_id)

    def authorize_member(self, db: Session, *, user_id: str, association_id: str) -> bool:
        return self.has_role(
            db, user_id=user_id, association_id=association_id, role=Role.MEMBER
        )

    def get_members(self, db: Session, *, association_id: str) -> List[User]:
        return (
            db.query(User)
            .join(UserAssociation, UserAssociation.user_id == User.id)
            .filter(UserAssociation.association_id == association_id)
            .order_by(User.name.asc())
            .all()
        )


relations = CRUDRelations()
