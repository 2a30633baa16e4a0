"""
Crab endpoints.

``GET /crabs`` lists every stored crab and ``POST /crabs`` stores a
new one.  Request bodies are validated by FastAPI against
``CrabCreate`` before the handler runs, so a malformed body is
rejected with 422 and never reaches the database.  Database failures
surface as 500 with the driver's error message as ``detail``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from crab_api.app.core.db import Pool, StorageError, get_pool
from crab_api.app.schemas.crab import CrabCreate, CrabRead
from crab_api.app.services.crab_service import CrabService

router = APIRouter()


def internal_error(exc: Exception) -> HTTPException:
    """Wrap a storage failure into a 500 response carrying its message."""
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=List[CrabRead])
async def list_crabs(pool: Pool = Depends(get_pool)) -> List[CrabRead]:
    """Return all crabs.

    No pagination, filtering or sorting: the response holds every row
    in the order the database returns them.
    """
    try:
        return await CrabService.list_crabs(pool)
    except StorageError as exc:
        raise internal_error(exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_crab(crab_in: CrabCreate, pool: Pool = Depends(get_pool)) -> Response:
    """Store a new crab and answer 201 with an empty body."""
    try:
        await CrabService.create_crab(pool, crab_in)
    except StorageError as exc:
        raise internal_error(exc) from exc
    return Response(status_code=status.HTTP_201_CREATED)
