# hood_service/constants/reservation.py
"""
Constants for field reservation status values.
"""


class ReservationStatus:
    """Field reservation status values."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"

    @classmethod
    def all_values(cls) -> list[str]:
        """Return all valid status values."""
        return [cls.ACTIVE, cls.DELETED]

    @classmethod
    def is_valid(cls, status: str) -> bool:
        """Check if a status value is valid."""
        return status in cls.all_values()
