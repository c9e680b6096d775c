"""Positions REST API: list, read, redeem, transfer, token fields."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.pm_common.errors import InvalidTransferError, NotPositionOwnerError
from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user, get_user_service
from src.pm_gateway.user.models import User
from src.pm_gateway.user.service import UserService
from src.pm_position.application.schemas import (
    PositionListResponse,
    PositionResponse,
    RedeemResponse,
    TokenFieldsRequest,
    TransferRequest,
)

router = APIRouter(prefix="/positions", tags=["positions"])


@router.get("")
async def list_positions(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
    market_id: str | None = Query(None),
) -> ApiResponse:
    items = [
        p for p in engine.positions_of(current_user.id)
        if market_id is None or p.market_id == market_id
    ]
    data = PositionListResponse(
        items=[PositionResponse.from_domain(p) for p in items],
        total=len(items),
    )
    return respond(request, data.model_dump())


@router.get("/{position_id}")
async def get_position(
    position_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    position = engine.get_position(position_id)
    if position.owner_id != current_user.id:
        raise NotPositionOwnerError(position_id)
    return respond(request, PositionResponse.from_domain(position).model_dump())


@router.post("/{position_id}/redeem")
async def redeem_position(
    position_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    result = await engine.redeem(position_id, current_user.id)
    data = RedeemResponse.from_result(result, engine.custody.balance_of(current_user.id))
    return respond(request, data.model_dump(), "Position redeemed")


@router.post("/{position_id}/transfer")
async def transfer_position(
    position_id: str,
    body: TransferRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse:
    recipient = users.get(body.to_user_id)
    if recipient is None or not recipient.is_active:
        raise InvalidTransferError(f"unknown or inactive recipient {body.to_user_id}")
    position = await engine.transfer_position(position_id, current_user.id, body.to_user_id)
    return respond(request, PositionResponse.from_domain(position).model_dump(), "Position transferred")


@router.put("/{position_id}/token")
async def set_token_fields(
    position_id: str,
    body: TokenFieldsRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    position = await engine.set_position_token_fields(
        position_id,
        current_user.id,
        yield_enabled=body.yield_enabled,
        yield_strategy_id=body.yield_strategy_id,
        display_uri=body.display_uri,
    )
    return respond(request, PositionResponse.from_domain(position).model_dump())
