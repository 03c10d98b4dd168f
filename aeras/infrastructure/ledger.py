"""
In-memory ride ledger.

Holds every ride (in creation order) and the cumulative points of each
puller for the lifetime of the process.  Nothing is persisted.

Concurrency safety
------------------
A single ``threading.Lock`` guards the whole structure, so each operation
is atomic relative to every other one.  When two callers race the same
transition exactly one wins; the other sees the new status and gets
``TransitionError``.

Callers only ever receive copies of rides, never the stored objects.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, Optional

from aeras.config import Settings
from aeras.domain.entities import NotFoundError, Ride, ValidationError
from aeras.domain.enums import RideStatus
from aeras.domain.points import FixedPoints, PointsStrategy

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RideLedger:
    def __init__(
        self,
        *,
        points: Optional[PointsStrategy] = None,
        seed_pullers: Iterable[str] = (),
        locations: Optional[Mapping[str, tuple[float, float]]] = None,
        strict_locations: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._rides: list[Ride] = []
        self._index: dict[str, Ride] = {}
        self._puller_points: dict[str, int] = {p: 0 for p in seed_pullers}
        self._counter = 0
        self._lock = threading.Lock()
        self._points = points or FixedPoints()
        self._locations = dict(locations or {})
        self._strict_locations = strict_locations
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "RideLedger":
        return cls(
            points=FixedPoints(settings.base_points_per_ride),
            seed_pullers=settings.seed_pullers,
            locations=settings.locations,
            strict_locations=settings.strict_locations,
        )

    # ── Queries ───────────────────────────────────────────────────────

    def list_rides(self) -> tuple[list[Ride], dict[str, int]]:
        """Snapshot of all rides (creation order) and puller point totals."""
        with self._lock:
            return [replace(r) for r in self._rides], dict(self._puller_points)

    def get_ride(self, ride_id: str) -> Ride:
        with self._lock:
            return replace(self._get(ride_id))

    def get_status(self, ride_id: str) -> RideStatus:
        with self._lock:
            return self._get(ride_id).status

    # ── Commands ──────────────────────────────────────────────────────

    def create_ride(
        self,
        pickup: Optional[str],
        destination: Optional[str],
        puller_id: Optional[str],
    ) -> str:
        """Register a new ``pending`` ride and return its id."""
        fields = {"pickup": pickup, "destination": destination, "pullerId": puller_id}
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ValidationError(f"Missing required info: {', '.join(missing)}")

        if self._strict_locations:
            unknown = [loc for loc in (pickup, destination) if loc not in self._locations]
            if unknown:
                raise ValidationError(f"Unknown location(s): {', '.join(unknown)}")

        with self._lock:
            self._counter += 1
            ride = Ride(
                id=f"ride_{self._counter}",
                pickup=pickup,
                destination=destination,
                puller_id=puller_id,
                request_time=self._clock(),
            )
            self._rides.append(ride)
            self._index[ride.id] = ride

        logger.info("New ride request: %s (%s to %s)", ride.id, pickup, destination)
        return ride.id

    def accept(self, ride_id: str) -> Ride:
        with self._lock:
            ride = self._get(ride_id)
            ride.transition_to(RideStatus.ACCEPTED, self._clock())
            snapshot = replace(ride)
        logger.info("Ride %s accepted", ride_id)
        return snapshot

    def confirm_pickup(self, ride_id: str) -> Ride:
        with self._lock:
            ride = self._get(ride_id)
            ride.transition_to(RideStatus.IN_PROGRESS, self._clock())
            snapshot = replace(ride)
        logger.info("Ride %s pickup confirmed", ride_id)
        return snapshot

    def confirm_dropoff(self, ride_id: str) -> Ride:
        """Complete the ride and credit the award to its puller."""
        with self._lock:
            ride = self._get(ride_id)
            awarded = self._points.award(ride)
            ride.transition_to(RideStatus.COMPLETED, self._clock())
            ride.points = awarded
            self._puller_points[ride.puller_id] = (
                self._puller_points.get(ride.puller_id, 0) + awarded
            )
            snapshot = replace(ride)
        logger.info(
            "Ride %s completed. %d points awarded to %s",
            ride_id, awarded, snapshot.puller_id,
        )
        return snapshot

    # ── Internals ─────────────────────────────────────────────────────

    def _get(self, ride_id: str) -> Ride:
        ride = self._index.get(ride_id)
        if ride is None:
            raise NotFoundError(ride_id)
        return ride
