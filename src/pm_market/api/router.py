"""pm_market REST endpoints.

POST /markets                 — save a new (unverified) market
GET  /markets                 — all markets in insertion order
GET  /markets/next-id         — reconcile once, then max numeric id + 1
GET  /markets/{market_id}     — detail with bets and total_bet_amount
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.errors import LocalStoreError
from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.schemas import SaveMarketRequest
from src.pm_market.application.service import MarketApplicationService
from src.pm_sync.api.dependencies import get_reconciler
from src.pm_sync.application.reconciler import Reconciler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


@router.post("")
async def save_market(
    body: SaveMarketRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.save_market(db, body)
    return success_response(result.model_dump(), request)


@router.get("")
async def list_markets(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_markets(db)
    return success_response(result.model_dump(), request)


# Declared before /{market_id} so "next-id" is not captured as a market id
@router.get("/next-id")
async def next_market_id(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    reconciler: Annotated[Reconciler, Depends(get_reconciler)],
) -> ApiResponse:
    try:
        await reconciler.reconcile_one(db)
    except LocalStoreError as e:
        # The pass was rolled back; the id is still served from what is stored
        logger.error("Reconcile before next-id failed, serving id anyway: %s", e.message)
    result = await _service.next_market_id(db)
    return success_response(result.model_dump(), request)


@router.get("/{market_id}")
async def get_market(
    market_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_market(db, market_id)
    return success_response(result.model_dump(), request)
