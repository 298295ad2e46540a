# hood_service/graphql/association_mutations.py
"""
GraphQL Mutation Resolvers for users, associations and roles.

- createOwnUser / updateOwnUser: profile of the token subject
- createAssociation: the creator becomes admin and member
- associate: join an association as a member
- createAssociationAdmin / createAssociationTreasurer: admin only
"""

import strawberry
from strawberry.types import Info
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from hood_service import crud
from hood_service.schemas.association import AssociationCreate
from hood_service.schemas.membership import TreasurerCreate
from hood_service.schemas.user import UserCreate, UserUpdate
from hood_service.utils.permissions import (
    require_admin,
    require_association,
    require_user_id,
)
from .types import (
    AssociationAdminType,
    AssociationCreateInput,
    AssociationTreasurerInput,
    AssociationTreasurerType,
    AssociationType,
    UserAssociationType,
    UserCreateInput,
    UserType,
    UserUpdateInput,
)

logger = logging.getLogger(__name__)


def _require_profile(db, user_id: str):
    user_obj = crud.user.get(db, id=user_id)
    if not user_obj:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user_obj


@strawberry.type
class AssociationMutations:

    @strawberry.mutation
    def create_own_user(self, user_in: UserCreateInput, info: Info) -> UserType:
        user_id = require_user_id(info.context.user)
        db = info.context.db

        if crud.user.get(db, id=user_id):
            raise HTTPException(status_code=400, detail="User profile already exists")
        if user_in.email and crud.user.get_by_email(db, email=user_in.email):
            raise HTTPException(status_code=400, detail="Email already in use")

        try:
            user_schema = UserCreate(**user_in.__dict__)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            user_obj = crud.user.create_with_id(db, obj_in=user_schema, user_id=user_id)
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=400, detail="User profile already exists")
        logger.info(f"Profile created for user {user_id}")
        return user_obj

    @strawberry.mutation
    def update_own_user(self, user_in: UserUpdateInput, info: Info) -> UserType:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        user_obj = _require_profile(db, user_id)

        update_data = {k: v for k, v in user_in.__dict__.items() if v is not None}
        return crud.user.update(db, db_obj=user_obj, obj_in=UserUpdate(**update_data))

    @strawberry.mutation
    def create_association(
        self, association_in: AssociationCreateInput, info: Info
    ) -> AssociationType:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        _require_profile(db, user_id)

        association_schema = AssociationCreate(**association_in.__dict__)
        return crud.association.create_with_founder(
            db, obj_in=association_schema, founder_id=user_id
        )

    @strawberry.mutation
    def associate(
        self, association_id: strawberry.ID, info: Info
    ) -> UserAssociationType:
        """Join an association as a plain member (idempotent)."""
        user_id = require_user_id(info.context.user)
        db = info.context.db
        _require_profile(db, user_id)
        require_association(db, str(association_id))

        return crud.relations.create_user_association(
            db, user_id=user_id, association_id=str(association_id)
        )

    @strawberry.mutation
    def create_association_admin(
        self, user_id: strawberry.ID, association_id: strawberry.ID, info: Info
    ) -> AssociationAdminType:
        caller_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, str(association_id))
        require_admin(db, user_id=caller_id, association_id=str(association_id))
        _require_profile(db, str(user_id))

        admin = crud.relations.create_admin(
            db, user_id=str(user_id), association_id=str(association_id)
        )
        logger.info(
            f"User {caller_id} granted admin of {association_id} to user {user_id}"
        )
        return admin

    @strawberry.mutation
    def create_association_treasurer(
        self, treasurer_in: AssociationTreasurerInput, info: Info
    ) -> AssociationTreasurerType:
        caller_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, treasurer_in.association_id)
        require_admin(db, user_id=caller_id, association_id=treasurer_in.association_id)
        _require_profile(db, treasurer_in.user_id)

        try:
            treasurer_schema = TreasurerCreate(**treasurer_in.__dict__)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            return crud.relations.create_treasurer(db, obj_in=treasurer_schema)
        except IntegrityError:
            db.rollback()
            raise HTTPException(
                status_code=400,
                detail="A treasurer term starting on that date already exists",
            )
