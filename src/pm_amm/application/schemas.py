"""Pool and bet request/response schemas."""
from pydantic import BaseModel, Field

from src.pm_amm.domain.bet_service import BetExecution
from src.pm_amm.domain.models import Pool
from src.pm_common.basis_points import BPS_DENOMINATOR, MAX_AMOUNT, bps_to_display
from src.pm_common.enums import Side


class CreatePoolRequest(BaseModel):
    market_id: str
    seed_amount: int = Field(gt=0, le=MAX_AMOUNT, description="Split 50/50 into YES/NO reserves")
    fee_rate_bps: int | None = Field(
        None, ge=0, le=BPS_DENOMINATOR, description="Pool fee; server default when omitted"
    )


class PlaceBetRequest(BaseModel):
    side: Side
    stake: int = Field(gt=0, le=MAX_AMOUNT)
    max_slippage_bps: int = Field(
        ge=0,
        le=BPS_DENOMINATOR,
        description="Maximum drift of the side's odds from the pre-trade quote",
    )


class PoolResponse(BaseModel):
    id: str
    market_id: str
    creator_id: str
    yes_reserve: int
    no_reserve: int
    k: str                   # may exceed 2**53; serialized as a string
    fee_rate_bps: int
    fees_collected: int
    custodied_balance: int
    yes_liability: int
    no_liability: int
    yes_odds_bps: int
    no_odds_bps: int
    created_at_ms: int

    @classmethod
    def from_domain(cls, p: Pool, odds: tuple[int, int]) -> "PoolResponse":
        return cls(
            id=p.id,
            market_id=p.market_id,
            creator_id=p.creator_id,
            yes_reserve=p.yes_reserve,
            no_reserve=p.no_reserve,
            k=str(p.k),
            fee_rate_bps=p.fee_rate_bps,
            fees_collected=p.fees_collected,
            custodied_balance=p.custodied_balance,
            yes_liability=p.yes_liability,
            no_liability=p.no_liability,
            yes_odds_bps=odds[0],
            no_odds_bps=odds[1],
            created_at_ms=p.created_at_ms,
        )


class OddsResponse(BaseModel):
    pool_id: str
    yes_odds_bps: int
    no_odds_bps: int
    yes_odds_display: str    # "40.98%"
    no_odds_display: str

    @classmethod
    def from_quote(cls, pool_id: str, odds: tuple[int, int]) -> "OddsResponse":
        return cls(
            pool_id=pool_id,
            yes_odds_bps=odds[0],
            no_odds_bps=odds[1],
            yes_odds_display=bps_to_display(odds[0]),
            no_odds_display=bps_to_display(odds[1]),
        )


class BetPreviewResponse(BaseModel):
    side: Side
    stake: int
    treasury_fee: int
    pool_fee: int
    effective_stake: int
    odds_before_bps: int
    odds_after_bps: int
    slippage_bps: int
    potential_payout: int

    @classmethod
    def from_execution(cls, e: BetExecution) -> "BetPreviewResponse":
        return cls(
            side=e.side,
            stake=e.stake,
            treasury_fee=e.treasury_fee,
            pool_fee=e.pool_fee,
            effective_stake=e.effective_stake,
            odds_before_bps=e.odds_before,
            odds_after_bps=e.odds_after,
            slippage_bps=e.slippage_bps,
            potential_payout=e.potential_payout,
        )
