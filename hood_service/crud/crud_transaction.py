# hood_service/crud/crud_transaction.py
from decimal import Decimal
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session
from .base import CRUDBase
from hood_service.models.transaction import Transaction
from hood_service.schemas.transaction import TransactionCreate, TransactionUpdate


class CRUDTransaction(CRUDBase[Transaction, TransactionCreate, TransactionUpdate]):

    def create_with_creator(
        self, db: Session, *, obj_in: TransactionCreate, creator_id: str
    ) -> Transaction:
        return self.create(db, obj_in=obj_in, creator_id=creator_id)

    def get_multi_by_association(
        self,
        db: Session,
        *,
        association_id: str,
        include_deleted: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Transaction]:
        query = db.query(self.model).filter(self.model.association_id == association_id)
        if not include_deleted:
            query = query.filter(self.model.deleted == False)
        return (
            query.order_by(self.model.reference_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def toggle_deleted(self, db: Session, *, db_obj: Transaction) -> Transaction:
        """Deleting a transaction twice restores it."""
        db_obj.deleted = not db_obj.deleted
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_balance(self, db: Session, *, association_id: str) -> Decimal:
        total = (
            db.query(func.coalesce(func.sum(self.model.amount), 0))
            .filter(
                self.model.association_id == association_id,
                self.model.deleted == False,
            )
            .scalar()
        )
        return Decimal(str(total)).quantize(Decimal("0.01"))


transaction = CRUDTransaction(Transaction)
