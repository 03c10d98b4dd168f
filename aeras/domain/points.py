"""
Puller point awards  (Strategy Pattern)
=======================================

A puller earns points when a ride reaches ``completed``.  The award is a
flat amount per ride (``base_points_per_ride``); the strategy seam exists
so the ledger never hard-codes the amount.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .entities import Ride


class PointsStrategy(ABC):
    @abstractmethod
    def award(self, ride: Ride) -> int: ...


class FixedPoints(PointsStrategy):
    def __init__(self, base_points: int = 10):
        if base_points <= 0:
            raise ValueError("base_points must be positive")
        self.base_points = base_points

    def award(self, ride: Ride) -> int:
        return self.base_points
