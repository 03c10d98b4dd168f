"""
Ride endpoints
==============

POST /request-ride          -- create a ride request (returns 201)
GET  /rides                 -- every ride plus puller point totals
GET  /ride-status/{ride_id} -- poll a single ride's status
POST /accept-ride/{ride_id}     -- pending     -> accepted
POST /confirm-pickup/{ride_id}  -- accepted    -> in_progress
POST /confirm-dropoff/{ride_id} -- in_progress -> completed (awards points)

A transition on an unknown ride and a transition out of order both answer
404 with the same message; the log records which one it was.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Request

from aeras.api.dependencies import get_ledger
from aeras.api.middleware import limiter
from aeras.api.schemas import (
    ErrorResponse,
    RideCreatedResponse,
    RideCreateRequest,
    RideListResponse,
    RideResponse,
    RideStatusResponse,
)
from aeras.config import settings
from aeras.domain.entities import (
    NotFoundError,
    Ride,
    TransitionError,
    ValidationError,
)
from aeras.infrastructure.ledger import RideLedger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rides"])

MISSING_INFO = "Missing required info (pickup, destination, pullerId)."


def _advance(
    action: str, ride_id: str, transition: Callable[[str], Ride]
) -> RideResponse:
    try:
        ride = transition(ride_id)
    except NotFoundError:
        logger.info("Unable to %s %s: no such ride", action, ride_id)
        raise HTTPException(status_code=404, detail=f"Unable to {action}.")
    except TransitionError as exc:
        logger.info(
            "Unable to %s %s: ride is %s", action, ride_id, exc.current.value
        )
        raise HTTPException(status_code=404, detail=f"Unable to {action}.")
    return RideResponse.from_ride(ride)


@router.post(
    "/request-ride",
    status_code=201,
    response_model=RideCreatedResponse,
    summary="Create a ride request",
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(lambda: settings.rate_limit)
async def request_ride(
    request: Request,
    body: RideCreateRequest,
    ledger: RideLedger = Depends(get_ledger),
):
    try:
        ride_id = ledger.create_ride(body.pickup, body.destination, body.puller_id)
    except ValidationError as exc:
        logger.info("Rejected ride request: %s", exc)
        raise HTTPException(status_code=400, detail=MISSING_INFO)
    return RideCreatedResponse(ride_id=ride_id)


@router.get(
    "/rides",
    response_model=RideListResponse,
    response_model_exclude_none=True,
    summary="List all rides and puller points",
)
@limiter.limit(lambda: settings.rate_limit)
async def list_rides(
    request: Request,
    ledger: RideLedger = Depends(get_ledger),
):
    rides, puller_points = ledger.list_rides()
    return RideListResponse(
        rides=[RideResponse.from_ride(r) for r in rides],
        puller_points=puller_points,
    )


@router.get(
    "/ride-status/{ride_id}",
    response_model=RideStatusResponse,
    summary="Get a ride's status",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(lambda: settings.rate_limit)
async def ride_status(
    request: Request,
    ride_id: str,
    ledger: RideLedger = Depends(get_ledger),
):
    try:
        status = ledger.get_status(ride_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Ride not found.")
    return RideStatusResponse(status=status)


@router.post(
    "/accept-ride/{ride_id}",
    response_model=RideResponse,
    response_model_exclude_none=True,
    summary="Puller accepts a pending ride",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(lambda: settings.rate_limit)
async def accept_ride(
    request: Request,
    ride_id: str,
    ledger: RideLedger = Depends(get_ledger),
):
    return _advance("accept ride", ride_id, ledger.accept)


@router.post(
    "/confirm-pickup/{ride_id}",
    response_model=RideResponse,
    response_model_exclude_none=True,
    summary="Puller confirms passenger pickup",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(lambda: settings.rate_limit)
async def confirm_pickup(
    request: Request,
    ride_id: str,
    ledger: RideLedger = Depends(get_ledger),
):
    return _advance("confirm pickup", ride_id, ledger.confirm_pickup)


@router.post(
    "/confirm-dropoff/{ride_id}",
    response_model=RideResponse,
    response_model_exclude_none=True,
    summary="Puller confirms drop-off; points are awarded",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(lambda: settings.rate_limit)
async def confirm_dropoff(
    request: Request,
    ride_id: str,
    ledger: RideLedger = Depends(get_ledger),
):
    return _advance("confirm drop-off", ride_id, ledger.confirm_dropoff)
