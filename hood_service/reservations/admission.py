# hood_service/reservations/admission.py
"""
Reservation admission engine.

Decides whether a requested slot on a field can be booked. The checks run
in a fixed order and stop at the first failure:

1. load the field policy (no policy: only the overlap check applies)
2. the slot must be in the current period (Daily: same UTC day as ``now``)
3. ``now`` must be past the policy's daily opening time
4. the slot must not be longer than the policy allows
5. the slot must not overlap an active reservation on the field
6. the user must be under the per-period quota

Steps 1-4 are request-local; 5 and 6 hit storage. The engine never reads
the system clock: ``now`` travels inside the request.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, field_validator, model_validator

from hood_service.core.clock import ensure_utc
from .conflicts import ReservationConflictChecker, ReservationStore
from .errors import RejectionReason, ReservationError
from .rules import ReservationRules, parse_rules

logger = logging.getLogger(__name__)


class ReservationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_id: str
    user_id: str
    description: Optional[str] = None
    start: AwareDatetime
    end: AwareDatetime
    now: AwareDatetime

    @field_validator("start", "end", "now")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _start_before_end(self) -> "ReservationRequest":
        if self.start >= self.end:
            raise ValueError("start must be before end")
        return self


class AdmissionState(str, Enum):
    RECEIVED = "RECEIVED"
    POLICY_LOADED = "POLICY_LOADED"
    TEMPORAL_VALIDATED = "TEMPORAL_VALIDATED"
    CONFLICT_CHECKED = "CONFLICT_CHECKED"
    ADMITTED = "ADMITTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class AdmissionDecision:
    admitted: bool
    state: AdmissionState
    # Last state reached before the outcome; tells where a rejection happened.
    stage: AdmissionState
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None

    @classmethod
    def admit(cls) -> "AdmissionDecision":
        return cls(
            admitted=True,
            state=AdmissionState.ADMITTED,
            stage=AdmissionState.CONFLICT_CHECKED,
        )

    @classmethod
    def reject(
        cls, stage: AdmissionState, reason: RejectionReason, message: str
    ) -> "AdmissionDecision":
        return cls(
            admitted=False,
            state=AdmissionState.REJECTED,
            stage=stage,
            reason=reason,
            message=message,
        )


class ReservationAdmissionEngine:
    """Stateless; safe to share between concurrent requests."""

    def __init__(self, store: ReservationStore):
        self.store = store
        self.checker = ReservationConflictChecker(store)

    def load_policy(self, field_id: str) -> Optional[ReservationRules]:
        field = self.store.get_field(field_id)
        if field is None:
            raise ReservationError(
                f"Field {field_id} not found", RejectionReason.NOT_FOUND
            )
        return parse_rules(field.reservation_rules)

    def check_temporal(
        self, rules: ReservationRules, request: ReservationRequest
    ) -> Optional[AdmissionDecision]:
        stage = AdmissionState.POLICY_LOADED
        if not rules.is_same_day(request.now, request.start):
            return AdmissionDecision.reject(
                stage,
                RejectionReason.WRONG_DAY,
                "Reservations can only be made for today",
            )
        if not rules.is_after_cutoff(request.now):
            return AdmissionDecision.reject(
                stage,
                RejectionReason.TOO_EARLY,
                "Reservations can only be made after "
                f"{rules.reservations_start_at_time_utc.isoformat()} UTC",
            )
        if not rules.is_within_max_duration(request.start, request.end):
            return AdmissionDecision.reject(
                stage,
                RejectionReason.DURATION_EXCEEDED,
                "Reservations can only be made for a maximum of "
                f"{rules.max_duration_minutes} minutes",
            )
        return None

    def check_conflicts(
        self, rules: Optional[ReservationRules], request: ReservationRequest
    ) -> Optional[AdmissionDecision]:
        stage = AdmissionState.TEMPORAL_VALIDATED
        if self.checker.has_overlap(request.field_id, request.start, request.end):
            return AdmissionDecision.reject(
                stage,
                RejectionReason.SLOT_CONFLICT,
                "Field overlaps with another reservation",
            )
        if rules is None:
            return None

        count = self.checker.count_user_reservations_in_period(
            request.user_id,
            rules.period_window(request.now),
            field_id=request.field_id,
        )
        if count >= rules.max_reservations_per_period:
            return AdmissionDecision.reject(
                stage,
                RejectionReason.QUOTA_EXCEEDED,
                f"Only {rules.max_reservations_per_period} reservation(s) per "
                f"{rules.reservation_period.value.lower()} period are allowed",
            )
        return None

    def evaluate(self, request: ReservationRequest) -> AdmissionDecision:
        rules = self.load_policy(request.field_id)

        if rules is not None:
            rejection = self.check_temporal(rules, request)
            if rejection is not None:
                self._log_rejection(request, rejection)
                return rejection

        rejection = self.check_conflicts(rules, request)
        if rejection is not None:
            self._log_rejection(request, rejection)
            return rejection

        logger.info(
            f"Reservation admitted for user {request.user_id} on field "
            f"{request.field_id} [{request.start.isoformat()}, {request.end.isoformat()})"
        )
        return AdmissionDecision.admit()

    def _log_rejection(
        self, request: ReservationRequest, decision: AdmissionDecision
    ) -> None:
        logger.info(
            f"Reservation rejected ({decision.reason.value}) for user "
            f"{request.user_id} on field {request.field_id} at stage {decision.stage.value}"
        )
