"""pm_market REST endpoints.

POST /markets                          create (caller becomes creator)
GET  /markets                          list, filter by status/category
GET  /markets/{market_id}              full detail
POST /markets/{market_id}/close        creator only, OPEN -> CLOSED
POST /markets/{market_id}/resolve      creator only, CLOSED -> RESOLVED after deadline
POST /markets/{market_id}/dispute      RESOLVED -> DISPUTED
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.pm_common.enums import MarketStatus
from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user
from src.pm_gateway.user.models import User
from src.pm_market.application.schemas import (
    CreateMarketRequest,
    MarketDetail,
    MarketListItem,
    MarketListResponse,
    ResolveRequest,
)

router = APIRouter(prefix="/markets", tags=["markets"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_market(
    request: Request,
    body: CreateMarketRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    market = await engine.create_market(
        creator_id=current_user.id,
        description=body.description,
        resolution_time_ms=body.resolution_time_ms,
        min_bet=body.min_bet,
        max_bet=body.max_bet,
        fee_rate_bps=body.fee_rate_bps,
        category=body.category,
        resolution_source=body.resolution_source,
    )
    return respond(request, MarketDetail.from_domain(market).model_dump(), "Market created")


@router.get("")
async def list_markets(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
    market_status: MarketStatus | None = Query(None, alias="status"),
    category: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    markets = engine.list_markets(market_status, category)
    data = MarketListResponse(
        items=[MarketListItem.from_domain(m) for m in markets[:limit]],
        total=len(markets),
    )
    return respond(request, data.model_dump())


@router.get("/{market_id}")
async def get_market(
    market_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    market = engine.get_market(market_id)
    return respond(request, MarketDetail.from_domain(market).model_dump())


@router.post("/{market_id}/close")
async def close_market(
    market_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    market = await engine.close_market(market_id, current_user.id)
    return respond(request, MarketDetail.from_domain(market).model_dump(), "Market closed")


@router.post("/{market_id}/resolve")
async def resolve_market(
    market_id: str,
    body: ResolveRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    market = await engine.resolve_market(market_id, current_user.id, body.outcome)
    return respond(request, MarketDetail.from_domain(market).model_dump(), "Market resolved")


@router.post("/{market_id}/dispute")
async def dispute_market(
    market_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    market = await engine.dispute_market(market_id, current_user.id)
    return respond(request, MarketDetail.from_domain(market).model_dump(), "Market disputed")
