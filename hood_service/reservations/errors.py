# hood_service/reservations/errors.py
"""
Typed outcomes of the reservation engine.

Every rejection carries a ``RejectionReason`` so callers (the GraphQL layer,
tests) branch on the cause instead of on message text.
"""

from enum import Enum


class RejectionReason(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    WRONG_DAY = "WRONG_DAY"
    TOO_EARLY = "TOO_EARLY"
    DURATION_EXCEEDED = "DURATION_EXCEEDED"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    POLICY_PARSE_ERROR = "POLICY_PARSE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    INVALID_INTERVAL = "INVALID_INTERVAL"
    NOT_FOUND = "NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"


class ReservationError(Exception):
    """Base class for every reservation failure."""

    reason: RejectionReason = RejectionReason.STORAGE_ERROR

    def __init__(self, message: str, reason: RejectionReason | None = None):
        if reason is not None:
            self.reason = reason
        self.message = message
        super().__init__(message)


class ReservationRejected(ReservationError):
    """An expected, user-facing rejection (policy, conflict, quota, auth)."""

    def __init__(self, reason: RejectionReason, message: str):
        super().__init__(message, reason)


class PolicyParseError(ReservationError):
    """The stored policy blob is not a valid ReservationRules document."""

    reason = RejectionReason.POLICY_PARSE_ERROR


class StorageError(ReservationError):
    """The persistence layer failed; never retried by the engine."""

    reason = RejectionReason.STORAGE_ERROR


class InvalidReservationTransition(ReservationError):
    """A lifecycle transition that is not allowed (e.g. undelete)."""

    reason = RejectionReason.INVALID_TRANSITION
