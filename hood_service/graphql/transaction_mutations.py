# hood_service/graphql/transaction_mutations.py
import strawberry
from strawberry.types import Info
from fastapi import HTTPException
from pydantic import ValidationError
import logging

from hood_service import crud
from hood_service.constants.roles import Role
from hood_service.schemas.transaction import TransactionCreate
from hood_service.utils.permissions import (
    require_association,
    require_role,
    require_user_id,
)
from .types import TransactionCreateInput, TransactionType

logger = logging.getLogger(__name__)


@strawberry.type
class TransactionMutations:
    """Only a treasurer whose term covers today may touch the cash book."""

    @strawberry.mutation
    def create_transaction(
        self, transaction_in: TransactionCreateInput, info: Info
    ) -> TransactionType:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, transaction_in.association_id)
        require_role(
            db,
            user_id=user_id,
            association_id=transaction_in.association_id,
            role=Role.TREASURER,
            on_date=info.context.clock.now().date(),
        )

        try:
            transaction_schema = TransactionCreate(**transaction_in.__dict__)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        transaction_obj = crud.transaction.create_with_creator(
            db, obj_in=transaction_schema, creator_id=user_id
        )
        logger.info(
            f"Transaction {transaction_obj.id} of {transaction_obj.amount} recorded "
            f"in association {transaction_obj.association_id} by {user_id}"
        )
        return transaction_obj

    @strawberry.mutation
    def delete_transaction(
        self, transaction_id: strawberry.ID, info: Info
    ) -> TransactionType:
        """Toggle the deleted flag: deleting twice restores the transaction."""
        user_id = require_user_id(info.context.user)
        db = info.context.db
        transaction_obj = crud.transaction.get(db, id=str(transaction_id))
        if not transaction_obj:
            raise HTTPException(status_code=404, detail="Transaction not found")
        require_role(
            db,
            user_id=user_id,
            association_id=transaction_obj.association_id,
            role=Role.TREASURER,
            on_date=info.context.clock.now().date(),
        )

        transaction_obj = crud.transaction.toggle_deleted(db, db_obj=transaction_obj)
        logger.info(
            f"Transaction {transaction_obj.id} deleted={transaction_obj.deleted} by {user_id}"
        )
        return transaction_obj
