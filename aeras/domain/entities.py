"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``Ride``: enforces the forward-only lifecycle
  (pending -> accepted -> in_progress -> completed).
- Each transition stamps its own timestamp field, so a timestamp is set
  exactly when the ride has passed through the matching state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import RideStatus, RIDE_TRANSITIONS


class LedgerError(Exception):
    """Base class for recoverable ride ledger failures."""


class ValidationError(LedgerError):
    """Raised when a ride request is missing required information."""


class NotFoundError(LedgerError):
    """Raised when no ride exists for the given id."""

    def __init__(self, ride_id: str):
        super().__init__(f"Ride {ride_id} not found")
        self.ride_id = ride_id


class TransitionError(LedgerError):
    """Raised when a ride status change violates the state machine."""

    def __init__(self, ride_id: str, current: RideStatus, target: RideStatus):
        super().__init__(
            f"Cannot transition ride {ride_id} from {current.value} to {target.value}"
        )
        self.ride_id = ride_id
        self.current = current
        self.target = target


# Which timestamp field a transition sets
_STAMPS = {
    RideStatus.ACCEPTED: "accept_time",
    RideStatus.IN_PROGRESS: "pickup_time",
    RideStatus.COMPLETED: "dropoff_time",
}


@dataclass
class Ride:
    id: str
    pickup: str
    destination: str
    puller_id: str
    status: RideStatus = RideStatus.PENDING
    request_time: Optional[datetime] = None
    accept_time: Optional[datetime] = None
    pickup_time: Optional[datetime] = None
    dropoff_time: Optional[datetime] = None
    points: int = 0

    def transition_to(self, new_status: RideStatus, at: datetime) -> None:
        """Move to *new_status* at time *at* if the transition is legal, else raise."""
        allowed = RIDE_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise TransitionError(self.id, self.status, new_status)
        self.status = new_status
        setattr(self, _STAMPS[new_status], at)

    @property
    def is_completed(self) -> bool:
        return self.status == RideStatus.COMPLETED
