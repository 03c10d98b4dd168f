"""Pydantic request / response schemas for the REST API.

Field names are snake_case in Python and camelCase on the wire, which is
what the puller UI, the admin dashboard and the user-side device expect.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aeras.domain.entities import Ride
from aeras.domain.enums import RideStatus

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ──────────────────────────────────────────────────────────


class RideCreateRequest(BaseModel):
    # Optional here so that a missing field is reported by the ledger
    # with the same 400 as an empty one.
    pickup: Optional[str] = Field(None, examples=["CUET Campus"])
    destination: Optional[str] = Field(None, examples=["Pahartoli"])
    puller_id: Optional[str] = Field(None, examples=["puller_001"])

    # camelCase keys only; a snake_case "puller_id" is ignored
    model_config = ConfigDict(alias_generator=to_camel)


# ── Responses ─────────────────────────────────────────────────────────


class RideCreatedResponse(BaseModel):
    message: str = "Ride request created successfully."
    ride_id: str

    model_config = _camel


class RideResponse(BaseModel):
    id: str
    pickup: str
    destination: str
    puller_id: str
    status: RideStatus
    request_time: Optional[datetime] = None
    accept_time: Optional[datetime] = None
    pickup_time: Optional[datetime] = None
    dropoff_time: Optional[datetime] = None
    points: int = 0

    model_config = _camel

    @classmethod
    def from_ride(cls, ride: Ride) -> RideResponse:
        return cls(**asdict(ride))


class RideListResponse(BaseModel):
    rides: list[RideResponse] = []
    puller_points: dict[str, int] = {}

    model_config = _camel


class RideStatusResponse(BaseModel):
    status: RideStatus


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    message: str
