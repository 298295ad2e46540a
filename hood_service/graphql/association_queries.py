# hood_service/graphql/association_queries.py
import strawberry
from typing import List, Optional
from strawberry.types import Info

from hood_service import crud
from hood_service.utils.permissions import (
    require_association,
    require_member,
    require_user_id,
)
from .types import AssociationType, UserType


@strawberry.type
class AssociationQueries:
    """User profile and association lookups."""

    @strawberry.field
    def me(self, info: Info) -> Optional[UserType]:
        """Profile of the caller, null until ``createOwnUser`` has run."""
        user_id = require_user_id(info.context.user)
        return crud.user.get(info.context.db, id=user_id)

    @strawberry.field
    def user(self, id: strawberry.ID, info: Info) -> Optional[UserType]:
        require_user_id(info.context.user)
        return crud.user.get(info.context.db, id=str(id))

    @strawberry.field
    def association(self, id: strawberry.ID, info: Info) -> Optional[AssociationType]:
        require_user_id(info.context.user)
        return crud.association.get(info.context.db, id=str(id))

    @strawberry.field
    def associations(
        self, info: Info, skip: int = 0, limit: int = 100
    ) -> List[AssociationType]:
        require_user_id(info.context.user)
        return crud.association.get_multi(info.context.db, skip=skip, limit=limit)

    @strawberry.field
    def association_members(
        self, association_id: strawberry.ID, info: Info
    ) -> List[UserType]:
        """Members of an association; only visible to its members."""
        user_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, str(association_id))
        require_member(db, user_id=user_id, association_id=str(association_id))
        return crud.relations.get_members(db, association_id=str(association_id))
