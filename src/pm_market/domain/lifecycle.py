"""Market state machine: OPEN -> CLOSED -> RESOLVED -> DISPUTED.

Transitions are monotonic. Every function validates before it mutates, so a
raised AppError leaves the Market untouched.
"""

from src.pm_common.basis_points import BPS_DENOMINATOR
from src.pm_common.enums import MARKET_STATUS_RANK, MarketStatus, Side
from src.pm_common.errors import (
    BeforeResolutionTimeError,
    InvalidMarketParamsError,
    MarketAlreadyClosedError,
    MarketNotClosedError,
    MarketNotResolvedError,
    NotMarketCreatorError,
)
from src.pm_market.domain.models import Market


def validate_market_params(min_bet: int, max_bet: int, fee_rate_bps: int) -> None:
    if min_bet < 1:
        raise InvalidMarketParamsError(f"min_bet must be >= 1, got {min_bet}")
    if min_bet > max_bet:
        raise InvalidMarketParamsError(f"min_bet {min_bet} exceeds max_bet {max_bet}")
    if not (0 <= fee_rate_bps <= BPS_DENOMINATOR):
        raise InvalidMarketParamsError(f"fee_rate_bps {fee_rate_bps} outside [0, 10000]")


def create_market(
    market_id: str,
    creator_id: str,
    description: str,
    resolution_time_ms: int,
    min_bet: int,
    max_bet: int,
    fee_rate_bps: int,
    now_ms: int,
    category: str | None = None,
    resolution_source: str | None = None,
) -> Market:
    validate_market_params(min_bet, max_bet, fee_rate_bps)
    return Market(
        id=market_id,
        creator_id=creator_id,
        description=description,
        category=category,
        resolution_source=resolution_source,
        resolution_time_ms=resolution_time_ms,
        min_bet=min_bet,
        max_bet=max_bet,
        fee_rate_bps=fee_rate_bps,
        created_at_ms=now_ms,
    )


def _require_creator(market: Market, caller_id: str) -> None:
    if caller_id != market.creator_id:
        raise NotMarketCreatorError(market.id)


def _advance(market: Market, new_status: MarketStatus) -> None:
    assert MARKET_STATUS_RANK[new_status] > MARKET_STATUS_RANK[market.status], (
        f"Market {market.id} cannot regress {market.status.value} -> {new_status.value}"
    )
    market.status = new_status


def close_market(market: Market, caller_id: str, now_ms: int) -> None:
    _require_creator(market, caller_id)
    if market.status != MarketStatus.OPEN:
        raise MarketAlreadyClosedError(market.id)
    _advance(market, MarketStatus.CLOSED)
    market.closed_at_ms = now_ms


def resolve_market(market: Market, caller_id: str, outcome: Side, now_ms: int) -> None:
    _require_creator(market, caller_id)
    if market.status != MarketStatus.CLOSED:
        raise MarketNotClosedError(market.id)
    if now_ms < market.resolution_time_ms:
        raise BeforeResolutionTimeError(market.id, market.resolution_time_ms, now_ms)
    _advance(market, MarketStatus.RESOLVED)
    market.result = outcome
    market.resolved_at_ms = now_ms


def dispute_market(market: Market) -> None:
    """Flag a resolved market as disputed. Adjudication is not modelled."""
    if market.status != MarketStatus.RESOLVED:
        raise MarketNotResolvedError(market.id)
    _advance(market, MarketStatus.DISPUTED)


def record_volume(market: Market, amount: int) -> None:
    """Called by bet execution only."""
    market.total_volume += amount
