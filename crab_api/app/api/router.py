"""
Top‑level router of the API.

The crab endpoints are mounted at ``/crabs``; new resources get their
own module in ``endpoints`` and are included here.
"""

from fastapi import APIRouter

from .endpoints import crabs

router = APIRouter()

router.include_router(crabs.router, prefix="/crabs", tags=["crabs"])
