"""AMM pool endpoints: create, read, quote, bet.

POST /pools                         seed a pool for an open market
GET  /pools/{pool_id}               reserves, fees, custody
GET  /pools/{pool_id}/odds          current (yes, no) odds in bps
POST /pools/{pool_id}/bets/preview  price a bet without executing it
POST /pools/{pool_id}/bets          place a bet, returns the minted position
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.pm_amm.application.schemas import (
    BetPreviewResponse,
    CreatePoolRequest,
    OddsResponse,
    PlaceBetRequest,
    PoolResponse,
)
from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user
from src.pm_gateway.user.models import User
from src.pm_position.application.schemas import PositionResponse

router = APIRouter(prefix="/pools", tags=["AMM"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pool(
    request: Request,
    body: CreatePoolRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    fee_rate_bps = (
        body.fee_rate_bps if body.fee_rate_bps is not None else settings.DEFAULT_POOL_FEE_BPS
    )
    pool = await engine.create_pool(
        market_id=body.market_id,
        creator_id=current_user.id,
        seed_amount=body.seed_amount,
        fee_rate_bps=fee_rate_bps,
    )
    data = PoolResponse.from_domain(pool, engine.quote_odds(pool.id))
    return respond(request, data.model_dump(), "Pool created")


@router.get("/{pool_id}")
async def get_pool(
    pool_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    pool = engine.get_pool(pool_id)
    data = PoolResponse.from_domain(pool, engine.quote_odds(pool_id))
    return respond(request, data.model_dump())


@router.get("/{pool_id}/odds")
async def get_odds(
    pool_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    data = OddsResponse.from_quote(pool_id, engine.quote_odds(pool_id))
    return respond(request, data.model_dump())


@router.post("/{pool_id}/bets/preview")
async def preview_bet(
    pool_id: str,
    body: PlaceBetRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    execution = engine.preview_bet(pool_id, body.side, body.stake, body.max_slippage_bps)
    return respond(request, BetPreviewResponse.from_execution(execution).model_dump())


@router.post("/{pool_id}/bets", status_code=status.HTTP_201_CREATED)
async def place_bet(
    pool_id: str,
    body: PlaceBetRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    position = await engine.place_bet(
        pool_id=pool_id,
        bettor_id=current_user.id,
        side=body.side,
        stake=body.stake,
        max_slippage_bps=body.max_slippage_bps,
    )
    return respond(request, PositionResponse.from_domain(position).model_dump(), "Bet placed")
