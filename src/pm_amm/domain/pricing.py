"""Constant-product pricing for a binary YES/NO pool.

Odds are implied probabilities in basis points. The odds of a side equal
the opposite reserve's share of the total reserves:

    yes_odds = no_reserve * 10000 // (yes_reserve + no_reserve)
    no_odds  = 10000 - yes_odds

Swaps use exact integer arithmetic (Python ints never overflow, so the
double-width product in_reserve * out_reserve is exact) and truncate, so
the pool keeps any rounding residual.
"""

from dataclasses import dataclass

from src.pm_common.basis_points import BPS_DENOMINATOR, apply_bps
from src.pm_common.enums import Side

EVEN_ODDS_BPS = BPS_DENOMINATOR // 2


@dataclass(frozen=True)
class FeeBreakdown:
    treasury_fee: int
    pool_fee: int
    effective_stake: int


def quote_odds(yes_reserve: int, no_reserve: int) -> tuple[int, int]:
    """Return (yes_odds, no_odds) in bps; always sums to 10000."""
    total = yes_reserve + no_reserve
    if total == 0:
        return EVEN_ODDS_BPS, EVEN_ODDS_BPS
    yes_odds = no_reserve * BPS_DENOMINATOR // total
    return yes_odds, BPS_DENOMINATOR - yes_odds


def odds_for(yes_reserve: int, no_reserve: int, side: Side) -> int:
    yes_odds, no_odds = quote_odds(yes_reserve, no_reserve)
    return yes_odds if side.is_yes else no_odds


def swap_output(in_reserve: int, out_reserve: int, in_amount: int) -> int:
    """tokens_out = out_reserve - floor(in_reserve * out_reserve / (in_reserve + in_amount))."""
    k = in_reserve * out_reserve
    return out_reserve - k // (in_reserve + in_amount)


def split_fees(stake: int, treasury_fee_bps: int, pool_fee_bps: int) -> FeeBreakdown:
    """Both fees are taken independently off the gross stake (not compounded)."""
    treasury_fee = apply_bps(stake, treasury_fee_bps)
    pool_fee = apply_bps(stake, pool_fee_bps)
    return FeeBreakdown(
        treasury_fee=treasury_fee,
        pool_fee=pool_fee,
        effective_stake=stake - treasury_fee - pool_fee,
    )


def potential_payout(stake: int, odds_bps: int) -> int:
    """Payout priced off the quote the bettor saw: stake * 10000 // odds."""
    return stake * BPS_DENOMINATOR // odds_bps
