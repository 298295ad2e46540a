# hood_service/crud/crud_field.py
import logging
from typing import List
from sqlalchemy.orm import Session
from .base import CRUDBase
from hood_service.models.field import Field
from hood_service.schemas.field import FieldCreate, FieldUpdate

logger = logging.getLogger(__name__)


class CRUDField(CRUDBase[Field, FieldCreate, FieldUpdate]):

    def get_multi_by_association(
        self, db: Session, *, association_id: str, skip: int = 0, limit: int = 100
    ) -> List[Field]:
        return (
            db.query(self.model)
            .filter(
                self.model.association_id == association_id,
                self.model.deleted == False,
            )
            .order_by(self.model.name.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_for_update(self, db: Session, *, id: str) -> Field | None:
        """Lock the field row until the surrounding transaction ends."""
        return db.query(self.model).filter(self.model.id == id).with_for_update().first()


field = CRUDField(Field)
