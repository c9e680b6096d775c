"""pm_account REST API: custody balance, deposit, withdraw, ledger."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.pm_account.application.schemas import (
    BalanceResponse,
    DepositRequest,
    LedgerEntryItem,
    LedgerResponse,
    MovementResponse,
    WithdrawRequest,
    cursor_decode,
    cursor_encode,
)
from src.pm_common.enums import LedgerEntryType
from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user
from src.pm_gateway.user.models import User

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/balance")
async def get_balance(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    data = BalanceResponse(
        user_id=current_user.id,
        available_balance=engine.custody.balance_of(current_user.id),
    )
    return respond(request, data.model_dump())


@router.post("/deposit")
async def deposit(
    request: Request,
    body: DepositRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    entry = engine.custody.deposit(current_user.id, body.amount, engine.clock.now_ms())
    return respond(request, MovementResponse.from_entry(entry).model_dump())


@router.post("/withdraw")
async def withdraw(
    request: Request,
    body: WithdrawRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    entry = engine.custody.withdraw(current_user.id, body.amount, engine.clock.now_ms())
    return respond(request, MovementResponse.from_entry(entry).model_dump())


@router.get("/ledger")
async def list_ledger(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    entry_type: LedgerEntryType | None = Query(None, description="Filter by LedgerEntryType"),
) -> ApiResponse:
    # Fetch limit+1 to detect has_more
    entries = engine.custody.entries_for(
        current_user.id, entry_type, cursor_decode(cursor), limit + 1
    )
    has_more = len(entries) > limit
    page = entries[:limit]
    data = LedgerResponse(
        items=[LedgerEntryItem.from_domain(e) for e in page],
        next_cursor=cursor_encode(page[-1].id) if has_more and page else None,
        has_more=has_more,
    )
    return respond(request, data.model_dump())
