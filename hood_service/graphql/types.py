# hood_service/graphql/types.py
import strawberry
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from hood_service.core.clock import ensure_utc
from hood_service.reservations.errors import RejectionReason
from hood_service.reservations.rules import parse_rules


# Stable error codes returned by the reservation mutations.
ReservationErrorCode = strawberry.enum(RejectionReason, name="ReservationErrorCode")


@strawberry.type
class UserType:
    id: str
    name: str
    birthday: Optional[datetime]
    address: Optional[str]
    activity: Optional[str]
    email: Optional[str]
    personal_phone: Optional[str]
    commercial_phone: Optional[str]
    uses_whatsapp: bool
    signed_at: Optional[datetime]
    identities: str
    created_at: datetime
    updated_at: datetime


@strawberry.type
class AssociationType:
    id: str
    name: str
    neighborhood: str
    country: str
    state: str
    address: str
    identity: Optional[str]
    created_at: datetime
    updated_at: datetime


@strawberry.type
class UserAssociationType:
    user_id: str
    association_id: str
    created_at: datetime


@strawberry.type
class AssociationAdminType:
    user_id: str
    association_id: str
    created_at: datetime


@strawberry.type
class AssociationTreasurerType:
    id: str
    user_id: str
    association_id: str
    start_date: date
    end_date: Optional[date]
    created_at: datetime


@strawberry.type
class TransactionType:
    id: str
    association_id: str
    creator_id: str
    details: str
    amount: Decimal
    reference_date: date
    deleted: bool
    created_at: datetime
    updated_at: datetime


@strawberry.type
class ReservationRulesType:
    """Parsed view of a field's reservation policy."""
    reservations_start_at_time_utc: str
    max_duration_minutes: int
    max_reservations_per_period: int
    reservation_period: str


@strawberry.type
class FieldType:
    id: str
    association_id: str
    name: str
    description: Optional[str]
    # Canonical JSON of the policy, null for an unrestricted field.
    reservation_rules: Optional[str]
    latitude: Decimal
    longitude: Decimal
    deleted: bool
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def rules(self, root) -> Optional[ReservationRulesType]:
        rules = parse_rules(root.reservation_rules)
        if rules is None:
            return None
        return ReservationRulesType(
            reservations_start_at_time_utc=rules.reservations_start_at_time_utc.isoformat(),
            max_duration_minutes=rules.max_duration_minutes,
            max_reservations_per_period=rules.max_reservations_per_period,
            reservation_period=rules.reservation_period.value,
        )


@strawberry.type
class FieldReservationType:
    id: str
    field_id: str
    user_id: str
    description: Optional[str]
    status: str
    deleted: bool
    created_at: datetime

    # SQLite hands back naive values; always expose UTC.
    @strawberry.field
    def start_date(self, root) -> datetime:
        return ensure_utc(root.start_date)

    @strawberry.field
    def end_date(self, root) -> datetime:
        return ensure_utc(root.end_date)

    @strawberry.field
    def deleted_at(self, root) -> Optional[datetime]:
        return ensure_utc(root.deleted_at) if root.deleted_at else None


@strawberry.type
class FieldReservationPayload:
    """Result of a reservation mutation; rejections are data, not errors."""
    success: bool
    reservation: Optional[FieldReservationType]
    error_code: Optional[ReservationErrorCode]
    message: Optional[str]


# --- Inputs ---


@strawberry.input
class UserCreateInput:
    name: str
    birthday: Optional[datetime] = None
    address: Optional[str] = None
    activity: Optional[str] = None
    email: Optional[str] = None
    personal_phone: Optional[str] = None
    commercial_phone: Optional[str] = None
    uses_whatsapp: bool = False
    signed_at: Optional[datetime] = None
    identities: str = ""


@strawberry.input
class UserUpdateInput:
    name: Optional[str] = None
    birthday: Optional[datetime] = None
    address: Optional[str] = None
    activity: Optional[str] = None
    personal_phone: Optional[str] = None
    commercial_phone: Optional[str] = None
    uses_whatsapp: Optional[bool] = None
    identities: Optional[str] = None


@strawberry.input
class AssociationCreateInput:
    name: str
    neighborhood: str
    country: str
    state: str
    address: str
    identity: Optional[str] = None


@strawberry.input
class AssociationTreasurerInput:
    user_id: str
    association_id: str
    start_date: date
    end_date: Optional[date] = None


@strawberry.input
class TransactionCreateInput:
    association_id: str
    details: str
    amount: Decimal
    reference_date: date


@strawberry.input
class FieldCreateInput:
    association_id: str
    name: str
    latitude: Decimal
    longitude: Decimal
    description: Optional[str] = None
    reservation_rules: Optional[str] = None


@strawberry.input
class FieldUpdateInput:
    name: Optional[str] = None
    description: Optional[str] = None
    reservation_rules: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    deleted: Optional[bool] = None


@strawberry.input
class FieldReservationInput:
    field_id: str
    user_id: str
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
