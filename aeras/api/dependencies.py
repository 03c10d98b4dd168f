"""FastAPI dependency injection helpers."""

from fastapi import Request

from aeras.infrastructure.ledger import RideLedger


def get_ledger(request: Request) -> RideLedger:
    """Return the ledger owned by the running application."""
    return request.app.state.ledger
