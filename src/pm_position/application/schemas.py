"""Pydantic schemas for positions API."""
from pydantic import BaseModel, Field

from src.pm_clearing.domain.settlement import SettlementResult
from src.pm_position.domain.models import Position


class TransferRequest(BaseModel):
    to_user_id: str = Field(..., min_length=1)


class TokenFieldsRequest(BaseModel):
    yield_enabled: bool
    yield_strategy_id: str | None = Field(None, max_length=128)
    display_uri: str | None = Field(None, max_length=2048)


class PositionResponse(BaseModel):
    id: str
    market_id: str
    pool_id: str
    owner_id: str
    side: str
    amount: int
    odds_at_purchase_bps: int
    potential_payout: int
    purchase_time_ms: int
    display_uri: str | None
    yield_enabled: bool
    yield_strategy_id: str | None

    @classmethod
    def from_domain(cls, p: Position) -> "PositionResponse":
        return cls(
            id=p.id,
            market_id=p.market_id,
            pool_id=p.pool_id,
            owner_id=p.owner_id,
            side=p.side.value,
            amount=p.amount,
            odds_at_purchase_bps=p.odds_at_purchase,
            potential_payout=p.potential_payout,
            purchase_time_ms=p.purchase_time_ms,
            display_uri=p.display_uri,
            yield_enabled=p.yield_enabled,
            yield_strategy_id=p.yield_strategy_id,
        )


class PositionListResponse(BaseModel):
    items: list[PositionResponse]
    total: int


class RedeemResponse(BaseModel):
    position_id: str
    win: bool
    payout: int
    available_balance: int

    @classmethod
    def from_result(cls, r: SettlementResult, available_balance: int) -> "RedeemResponse":
        return cls(
            position_id=r.position_id,
            win=r.win,
            payout=r.payout,
            available_balance=available_balance,
        )
