"""Unit tests for position settlement."""

import pytest

from src.pm_amm.domain.models import Pool
from src.pm_clearing.domain.settlement import apply_settlement, compute_settlement
from src.pm_common.enums import MarketStatus, Side
from src.pm_common.errors import MarketNotResolvedError, PoolInsolventError
from src.pm_market.domain.models import Market
from src.pm_position.domain.models import Position


def _market(status: MarketStatus, result: Side | None) -> Market:
    return Market(
        id="mkt_1",
        creator_id="lp",
        description="Test market",
        category=None,
        resolution_source=None,
        resolution_time_ms=10_000,
        min_bet=1,
        max_bet=1_000_000,
        fee_rate_bps=0,
        created_at_ms=0,
        status=status,
        result=result,
    )


def _pool(custodied: int = 1_150_000) -> Pool:
    return Pool(
        id="pool_1",
        market_id="mkt_1",
        creator_id="lp",
        yes_reserve=567_948,
        no_reserve=466_666,
        k=567_948 * 466_666,
        fee_rate_bps=0,
        custodied_balance=custodied,
        created_at_ms=0,
        yes_liability=200_000,
        no_liability=84_717,
    )


def _position(side: Side, payout: int) -> Position:
    return Position(
        id=f"pos_{side.value}",
        market_id="mkt_1",
        pool_id="pool_1",
        owner_id="alice",
        side=side,
        amount=100_000,
        odds_at_purchase=5000,
        potential_payout=payout,
        purchase_time_ms=0,
    )


class TestComputeSettlement:
    def test_winner_paid_fixed_payout(self) -> None:
        result = compute_settlement(
            _market(MarketStatus.RESOLVED, Side.YES), _pool(), _position(Side.YES, 200_000)
        )
        assert result.win is True
        assert result.payout == 200_000
        assert result.owner_id == "alice"

    def test_loser_paid_nothing(self) -> None:
        result = compute_settlement(
            _market(MarketStatus.RESOLVED, Side.YES), _pool(), _position(Side.NO, 84_717)
        )
        assert result.win is False
        assert result.payout == 0

    @pytest.mark.parametrize(
        "status", [MarketStatus.OPEN, MarketStatus.CLOSED, MarketStatus.DISPUTED]
    )
    def test_requires_resolved(self, status: MarketStatus) -> None:
        result = Side.YES if status == MarketStatus.DISPUTED else None
        with pytest.raises(MarketNotResolvedError) as exc_info:
            compute_settlement(_market(status, result), _pool(), _position(Side.YES, 200_000))
        assert exc_info.value.code == 3006

    def test_insolvent_pool_raises(self) -> None:
        with pytest.raises(PoolInsolventError) as exc_info:
            compute_settlement(
                _market(MarketStatus.RESOLVED, Side.YES),
                _pool(custodied=199_999),
                _position(Side.YES, 200_000),
            )
        assert exc_info.value.code == 9003

    def test_insolvent_pool_irrelevant_for_losers(self) -> None:
        result = compute_settlement(
            _market(MarketStatus.RESOLVED, Side.YES), _pool(custodied=0), _position(Side.NO, 10)
        )
        assert result.payout == 0


class TestApplySettlement:
    def test_winner_reduces_custody_and_liability(self) -> None:
        pool = _pool()
        position = _position(Side.YES, 200_000)
        result = compute_settlement(_market(MarketStatus.RESOLVED, Side.YES), pool, position)
        apply_settlement(pool, position, result)
        assert pool.custodied_balance == 950_000
        assert pool.yes_liability == 0
        assert pool.no_liability == 84_717

    def test_loser_releases_liability_only(self) -> None:
        pool = _pool()
        position = _position(Side.NO, 84_717)
        result = compute_settlement(_market(MarketStatus.RESOLVED, Side.YES), pool, position)
        apply_settlement(pool, position, result)
        assert pool.custodied_balance == 1_150_000
        assert pool.no_liability == 0
        assert pool.yes_liability == 200_000

    def test_reserves_untouched(self) -> None:
        pool = _pool()
        position = _position(Side.YES, 200_000)
        result = compute_settlement(_market(MarketStatus.RESOLVED, Side.YES), pool, position)
        apply_settlement(pool, position, result)
        assert (pool.yes_reserve, pool.no_reserve) == (567_948, 466_666)
