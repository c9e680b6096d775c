"""Pydantic schemas for pm_market API requests and responses."""

from pydantic import BaseModel, Field, model_validator

from src.pm_common.basis_points import BPS_DENOMINATOR, MAX_AMOUNT
from src.pm_common.enums import Side
from src.pm_market.domain.models import Market

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=2000)
    category: str | None = Field(None, max_length=64)
    resolution_source: str | None = Field(None, max_length=512)
    resolution_time_ms: int = Field(..., ge=0, description="Earliest resolution time (epoch ms)")
    min_bet: int = Field(..., ge=1, le=MAX_AMOUNT)
    max_bet: int = Field(..., ge=1, le=MAX_AMOUNT)
    fee_rate_bps: int = Field(0, ge=0, le=BPS_DENOMINATOR, description="Treasury fee")

    @model_validator(mode="after")
    def bet_bounds_ordered(self) -> "CreateMarketRequest":
        if self.min_bet > self.max_bet:
            raise ValueError("min_bet must not exceed max_bet")
        return self


class ResolveRequest(BaseModel):
    outcome: Side


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketListItem(BaseModel):
    id: str
    description: str
    category: str | None
    status: str
    resolution_time_ms: int
    total_volume: int

    @classmethod
    def from_domain(cls, m: Market) -> "MarketListItem":
        return cls(
            id=m.id,
            description=m.description,
            category=m.category,
            status=m.status.value,
            resolution_time_ms=m.resolution_time_ms,
            total_volume=m.total_volume,
        )


class MarketListResponse(BaseModel):
    items: list[MarketListItem]
    total: int


class MarketDetail(BaseModel):
    id: str
    creator_id: str
    description: str
    category: str | None
    resolution_source: str | None
    resolution_time_ms: int
    status: str
    result: str | None
    total_volume: int
    min_bet: int
    max_bet: int
    fee_rate_bps: int
    created_at_ms: int
    closed_at_ms: int | None
    resolved_at_ms: int | None

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            id=m.id,
            creator_id=m.creator_id,
            description=m.description,
            category=m.category,
            resolution_source=m.resolution_source,
            resolution_time_ms=m.resolution_time_ms,
            status=m.status.value,
            result=m.result.value if m.result is not None else None,
            total_volume=m.total_volume,
            min_bet=m.min_bet,
            max_bet=m.max_bet,
            fee_rate_bps=m.fee_rate_bps,
            created_at_ms=m.created_at_ms,
            closed_at_ms=m.closed_at_ms,
            resolved_at_ms=m.resolved_at_ms,
        )
