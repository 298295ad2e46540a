from .admission import (
    AdmissionDecision,
    AdmissionState,
    ReservationAdmissionEngine,
    ReservationRequest,
)
from .conflicts import ReservationConflictChecker, ReservationStore, intervals_overlap
from .errors import (
    InvalidReservationTransition,
    PolicyParseError,
    RejectionReason,
    ReservationError,
    ReservationRejected,
    StorageError,
)
from .lifecycle import ReservationStatus, ensure_admitted, mark_deleted
from .rules import ReservationPeriod, ReservationRules, parse_rules
