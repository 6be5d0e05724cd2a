"""pm_sync REST endpoints.

POST /sync/reconcile — run one reconciliation pass and report its outcome
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_sync.api.dependencies import get_reconciler
from src.pm_sync.application.reconciler import Reconciler
from src.pm_sync.application.schemas import ReconcileResponse

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/reconcile")
async def reconcile(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    reconciler: Annotated[Reconciler, Depends(get_reconciler)],
) -> ApiResponse:
    outcome = await reconciler.reconcile_one(db)
    return success_response(ReconcileResponse.from_outcome(outcome).model_dump(mode="json"), request)
