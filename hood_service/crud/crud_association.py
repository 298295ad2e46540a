# hood_service/crud/crud_association.py
import logging
from sqlalchemy.orm import Session
from .base import CRUDBase
from hood_service.models.association import Association
from hood_service.models.membership import UserAssociation, AssociationAdmin
from hood_service.schemas.association import AssociationCreate, AssociationUpdate

logger = logging.getLogger(__name__)


class CRUDAssociation(CRUDBase[Association, AssociationCreate, AssociationUpdate]):
    def create_with_founder(
        self, db: Session, *, obj_in: AssociationCreate, founder_id: str
    ) -> Association:
        """
        Create an association and make its founder both admin and member.
        All three rows are committed together.
        """
        try:
            db_obj = self.model(**obj_in.model_dump())
            db.add(db_obj)
            db.flush()
            db.add(UserAssociation(user_id=founder_id, association_id=db_obj.id))
            db.add(AssociationAdmin(user_id=founder_id, association_id=db_obj.id))
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        logger.info(f"Association {db_obj.id} created by founder {founder_id}")
        return db_obj


association = CRUDAssociation(Association)
