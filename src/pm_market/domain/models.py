"""Domain models for pm_market: pure dataclasses."""

from dataclasses import dataclass

from src.pm_common.enums import MarketStatus, Side


@dataclass
class Market:
    id: str
    creator_id: str
    description: str
    category: str | None
    resolution_source: str | None
    resolution_time_ms: int          # earliest time resolve() is accepted
    min_bet: int
    max_bet: int
    fee_rate_bps: int                # treasury fee, taken off the gross stake
    created_at_ms: int
    status: MarketStatus = MarketStatus.OPEN
    result: Side | None = None       # set iff status is RESOLVED or DISPUTED
    total_volume: int = 0
    closed_at_ms: int | None = None
    resolved_at_ms: int | None = None

    @property
    def is_open(self) -> bool:
        return self.status == MarketStatus.OPEN
