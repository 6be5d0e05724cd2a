"""pm_bet REST endpoints.

POST /bets                    — place a bet, bumps market total_amount
GET  /bets/users/{user_id}    — all bets of one user
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_bet.application.schemas import SaveBetRequest
from src.pm_bet.application.service import BetApplicationService
from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/bets", tags=["bets"])

_service = BetApplicationService()


@router.post("")
async def save_bet(
    body: SaveBetRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.save_bet(db, body)
    return success_response(result.model_dump(), request)


@router.get("/users/{user_id}")
async def list_user_bets(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_user_bets(db, user_id)
    return success_response(result.model_dump(), request)
