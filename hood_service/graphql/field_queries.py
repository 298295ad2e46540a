# hood_service/graphql/field_queries.py
"""
GraphQL Query Resolvers for fields and field reservations.
"""

import strawberry
from typing import List, Optional
from datetime import datetime
from strawberry.types import Info
from fastapi import HTTPException

from hood_service import crud
from hood_service.core.config import settings
from hood_service.reservations.errors import RejectionReason, ReservationError
from hood_service.services.reservation_service import list_field_reservations
from hood_service.utils.permissions import (
    require_association,
    require_user_id,
)
from .types import FieldReservationType, FieldType

_STATUS_BY_REASON = {
    RejectionReason.NOT_FOUND: 404,
    RejectionReason.UNAUTHORIZED: 403,
    RejectionReason.INVALID_INTERVAL: 400,
}


@strawberry.type
class FieldQueries:

    @strawberry.field
    def field(self, id: strawberry.ID, info: Info) -> Optional[FieldType]:
        require_user_id(info.context.user)
        field_obj = crud.field.get(info.context.db, id=str(id))
        if not field_obj or field_obj.deleted:
            return None
        return field_obj

    @strawberry.field
    def fields_by_association(
        self, association_id: strawberry.ID, info: Info
    ) -> List[FieldType]:
        require_user_id(info.context.user)
        db = info.context.db
        require_association(db, str(association_id))
        return crud.field.get_multi_by_association(db, association_id=str(association_id))

    @strawberry.field
    def field_reservations(
        self,
        field_id: strawberry.ID,
        from_date_time: datetime,
        to_date_time: datetime,
        info: Info,
    ) -> List[FieldReservationType]:
        """
        Active reservations of a field intersecting ``[fromDateTime, toDateTime)``.

        Only members of the field's association may look; the window must be
        shorter than MAX_RESERVATION_QUERY_DAYS.
        """
        user_id = require_user_id(info.context.user)
        try:
            return list_field_reservations(
                info.context.db,
                user_id=user_id,
                field_id=str(field_id),
                from_date_time=from_date_time,
                to_date_time=to_date_time,
                max_days=settings.MAX_RESERVATION_QUERY_DAYS,
            )
        except ReservationError as e:
            raise HTTPException(
                status_code=_STATUS_BY_REASON.get(e.reason, 500),
                detail=f"{e.reason.value}: {e.message}",
            )

    @strawberry.field
    def my_field_reservations(
        self, info: Info, include_deleted: bool = False
    ) -> List[FieldReservationType]:
        user_id = require_user_id(info.context.user)
        return crud.field_reservation.get_multi_by_user(
            info.context.db, user_id=user_id, include_deleted=include_deleted
        )
