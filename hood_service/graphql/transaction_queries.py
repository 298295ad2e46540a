# hood_service/graphql/transaction_queries.py
import strawberry
from typing import List, Optional
from decimal import Decimal
from strawberry.types import Info

from hood_service import crud
from hood_service.utils.permissions import (
    require_association,
    require_member,
    require_user_id,
)
from .types import TransactionType


@strawberry.type
class TransactionQueries:
    """Association cash book; members only."""

    @strawberry.field
    def transaction(self, id: strawberry.ID, info: Info) -> Optional[TransactionType]:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        transaction_obj = crud.transaction.get(db, id=str(id))
        if not transaction_obj:
            return None
        require_member(db, user_id=user_id, association_id=transaction_obj.association_id)
        return transaction_obj

    @strawberry.field
    def transactions_by_association(
        self,
        association_id: strawberry.ID,
        info: Info,
        include_deleted: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> List[TransactionType]:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, str(association_id))
        require_member(db, user_id=user_id, association_id=str(association_id))
        return crud.transaction.get_multi_by_association(
            db,
            association_id=str(association_id),
            include_deleted=include_deleted,
            skip=skip,
            limit=limit,
        )

    @strawberry.field
    def association_balance(self, association_id: strawberry.ID, info: Info) -> Decimal:
        """Sum of all non-deleted transaction amounts."""
        user_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, str(association_id))
        require_member(db, user_id=user_id, association_id=str(association_id))
        return crud.transaction.get_balance(db, association_id=str(association_id))
