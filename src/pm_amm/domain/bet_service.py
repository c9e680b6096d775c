"""Pool creation and bet execution against the constant-product pool.

Bet execution is split in two so a failed bet can never leave a partially
updated pool:

- ``price_bet`` runs every pre-trade rule and computes the full outcome
  without touching the pool (also used for previews).
- ``apply_bet`` commits a priced bet; it has no failure paths.
"""
import logging
from dataclasses import dataclass

from src.pm_amm.domain.models import Pool
from src.pm_amm.domain.pricing import (
    odds_for,
    potential_payout,
    split_fees,
    swap_output,
)
from src.pm_common.basis_points import BPS_DENOMINATOR
from src.pm_common.enums import Side
from src.pm_common.errors import InvalidPoolParamsError, PoolExhaustedError
from src.pm_market.domain.models import Market
from src.pm_risk.rules.balance_check import check_pool_can_underwrite
from src.pm_risk.rules.bet_limit import check_bet_amount
from src.pm_risk.rules.market_status import check_market_open
from src.pm_risk.rules.slippage import check_slippage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BetExecution:
    """Fully priced bet; every field is final once price_bet returns."""

    pool_id: str
    market_id: str
    side: Side
    stake: int
    treasury_fee: int
    pool_fee: int
    effective_stake: int
    tokens_out: int
    odds_before: int
    odds_after: int
    slippage_bps: int
    potential_payout: int
    new_yes_reserve: int
    new_no_reserve: int


def create_pool(
    pool_id: str,
    market: Market,
    creator_id: str,
    seed_amount: int,
    fee_rate_bps: int,
    now_ms: int,
    max_total_fee_bps: int = BPS_DENOMINATOR,
    min_seed_amount: int = 2,
) -> Pool:
    """Seed a pool 50/50. The whole seed moves into custody.

    An odd seed leaves the extra unit in custody but out of the reserves.
    """
    check_market_open(market)
    if not (0 <= fee_rate_bps <= BPS_DENOMINATOR):
        raise InvalidPoolParamsError(f"fee_rate_bps {fee_rate_bps} outside [0, 10000]")
    if market.fee_rate_bps + fee_rate_bps > max_total_fee_bps:
        raise InvalidPoolParamsError(
            f"combined fee {market.fee_rate_bps + fee_rate_bps} bps exceeds {max_total_fee_bps}"
        )
    if seed_amount < max(min_seed_amount, 2):
        raise InvalidPoolParamsError(f"seed_amount must be >= {max(min_seed_amount, 2)}")

    half = seed_amount // 2
    pool = Pool(
        id=pool_id,
        market_id=market.id,
        creator_id=creator_id,
        yes_reserve=half,
        no_reserve=half,
        k=half * half,
        fee_rate_bps=fee_rate_bps,
        custodied_balance=seed_amount,
        created_at_ms=now_ms,
    )
    logger.debug("Pool seeded: pool=%s market=%s reserve=%d", pool.id, market.id, half)
    return pool


def price_bet(
    market: Market,
    pool: Pool,
    side: Side,
    stake: int,
    max_slippage_bps: int,
) -> BetExecution:
    """Validate and price a bet. Pure: neither market nor pool is mutated."""
    check_market_open(market)
    check_bet_amount(market, stake)

    odds_before = odds_for(pool.yes_reserve, pool.no_reserve, side)
    if odds_before == 0:
        raise PoolExhaustedError(pool.id)

    fees = split_fees(stake, market.fee_rate_bps, pool.fee_rate_bps)
    eff = fees.effective_stake

    if side.is_yes:
        tokens_out = swap_output(pool.no_reserve, pool.yes_reserve, eff)
        new_yes = pool.yes_reserve + eff
        new_no = pool.no_reserve - tokens_out
    else:
        tokens_out = swap_output(pool.yes_reserve, pool.no_reserve, eff)
        new_no = pool.no_reserve + eff
        new_yes = pool.yes_reserve - tokens_out
    if new_yes <= 0 or new_no <= 0:
        raise PoolExhaustedError(pool.id)

    odds_after = odds_for(new_yes, new_no, side)
    drift = check_slippage(odds_before, odds_after, max_slippage_bps)

    payout = potential_payout(stake, odds_before)
    yes_liability = pool.yes_liability + (payout if side.is_yes else 0)
    no_liability = pool.no_liability + (0 if side.is_yes else payout)
    check_pool_can_underwrite(pool.custodied_balance + stake, yes_liability, no_liability)

    return BetExecution(
        pool_id=pool.id,
        market_id=market.id,
        side=side,
        stake=stake,
        treasury_fee=fees.treasury_fee,
        pool_fee=fees.pool_fee,
        effective_stake=eff,
        tokens_out=tokens_out,
        odds_before=odds_before,
        odds_after=odds_after,
        slippage_bps=drift,
        potential_payout=payout,
        new_yes_reserve=new_yes,
        new_no_reserve=new_no,
    )


def apply_bet(pool: Pool, execution: BetExecution) -> None:
    """Commit a priced bet to the pool. The full gross stake enters custody."""
    pool.yes_reserve = execution.new_yes_reserve
    pool.no_reserve = execution.new_no_reserve
    pool.k = pool.yes_reserve * pool.no_reserve
    pool.fees_collected += execution.pool_fee
    pool.custodied_balance += execution.stake
    if execution.side.is_yes:
        pool.yes_liability += execution.potential_payout
    else:
        pool.no_liability += execution.potential_payout
