# hood_service/graphql/field_mutations.py
"""
GraphQL Mutation Resolvers for fields and field reservations.

Provides mutation endpoints for:
- Create / update a field (association admins only)
- Reserve a field (members only, checked against the field's rules)
- Delete a reservation (owner only)

Reservation mutations never raise for a rejected booking; the reason is
returned in the payload as ``errorCode`` so clients can branch on it.
"""

import strawberry
from strawberry.types import Info
from fastapi import HTTPException
from pydantic import ValidationError
import logging

from hood_service import crud
from hood_service.reservations.errors import (
    PolicyParseError,
    RejectionReason,
    ReservationError,
    StorageError,
)
from hood_service.schemas.field import FieldCreate, FieldUpdate
from hood_service.services import reservation_service
from hood_service.utils.permissions import (
    require_admin,
    require_association,
    require_user_id,
)
from .types import (
    FieldCreateInput,
    FieldReservationInput,
    FieldReservationPayload,
    FieldType,
    FieldUpdateInput,
)

logger = logging.getLogger(__name__)


def _build_field_schema(schema_cls, data: dict):
    try:
        return schema_cls(**data)
    except PolicyParseError as e:
        raise HTTPException(status_code=400, detail=f"{e.reason.value}: {e.message}")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _rejected(error: ReservationError) -> FieldReservationPayload:
    return FieldReservationPayload(
        success=False,
        reservation=None,
        error_code=error.reason,
        message=error.message,
    )


@strawberry.type
class FieldMutations:
    """Field and field reservation mutation resolvers."""

    @strawberry.mutation
    def create_field(self, field_in: FieldCreateInput, info: Info) -> FieldType:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        require_association(db, field_in.association_id)
        require_admin(db, user_id=user_id, association_id=field_in.association_id)

        field_schema = _build_field_schema(FieldCreate, field_in.__dict__)
        field_obj = crud.field.create(db, obj_in=field_schema)
        logger.info(
            f"Field {field_obj.id} created in association {field_in.association_id} "
            f"by user {user_id}"
        )
        return field_obj

    @strawberry.mutation
    def update_field(
        self, field_id: strawberry.ID, field_in: FieldUpdateInput, info: Info
    ) -> FieldType:
        user_id = require_user_id(info.context.user)
        db = info.context.db
        field_obj = crud.field.get(db, id=str(field_id))
        if not field_obj:
            raise HTTPException(status_code=404, detail="Field not found")
        require_admin(db, user_id=user_id, association_id=field_obj.association_id)

        update_data = {k: v for k, v in field_in.__dict__.items() if v is not None}
        # An empty string clears the policy and makes the field unrestricted.
        if field_in.reservation_rules == "":
            update_data["reservation_rules"] = None
        field_schema = _build_field_schema(FieldUpdate, update_data)
        return crud.field.update(db, db_obj=field_obj, obj_in=field_schema)

    @strawberry.mutation
    def create_field_reservation(
        self, field_reservation_in: FieldReservationInput, info: Info
    ) -> FieldReservationPayload:
        """
        Reserve a field for ``[startDate, endDate)``.

        The caller must be the user the reservation is for and a member of
        the field's association. The request then goes through the field's
        reservation rules, the overlap check and the per-period quota.
        """
        user_id = require_user_id(info.context.user)
        if field_reservation_in.user_id != user_id:
            return FieldReservationPayload(
                success=False,
                reservation=None,
                error_code=RejectionReason.UNAUTHORIZED,
                message="Reservations can only be made for yourself",
            )

        try:
            reservation = reservation_service.create_field_reservation(
                info.context.db,
                user_id=user_id,
                field_id=field_reservation_in.field_id,
                description=field_reservation_in.description,
                start=field_reservation_in.start_date,
                end=field_reservation_in.end_date,
                now=info.context.clock.now(),
            )
        except StorageError as e:
            logger.error(f"Reservation for user {user_id} failed: {e.message}")
            return _rejected(e)
        except ReservationError as e:
            logger.info(
                f"Reservation for user {user_id} on field "
                f"{field_reservation_in.field_id} rejected: {e.reason.value}"
            )
            return _rejected(e)

        return FieldReservationPayload(
            success=True,
            reservation=reservation,
            error_code=None,
            message="Field reserved",
        )

    @strawberry.mutation
    def delete_field_reservation(
        self, field_reservation_id: strawberry.ID, info: Info
    ) -> FieldReservationPayload:
        user_id = require_user_id(info.context.user)
        try:
            reservation = reservation_service.delete_field_reservation(
                info.context.db,
                user_id=user_id,
                reservation_id=str(field_reservation_id),
                now=info.context.clock.now(),
            )
        except ReservationError as e:
            logger.info(
                f"Deletion of reservation {field_reservation_id} by user {user_id} "
                f"rejected: {e.reason.value}"
            )
            return _rejected(e)

        return FieldReservationPayload(
            success=True,
            reservation=reservation,
            error_code=None,
            message="Reservation deleted",
        )
