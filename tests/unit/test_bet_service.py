"""Unit tests for pool seeding and bet pricing/application."""

import dataclasses

import pytest

from src.pm_amm.domain.bet_service import apply_bet, create_pool, price_bet
from src.pm_amm.domain.models import Pool
from src.pm_common.enums import MarketStatus, Side
from src.pm_common.errors import (
    InsufficientLiquidityError,
    InvalidBetAmountError,
    InvalidPoolParamsError,
    MarketNotOpenError,
    PoolExhaustedError,
    SlippageExceededError,
)
from src.pm_market.domain.lifecycle import create_market
from src.pm_market.domain.models import Market

ANY_SLIPPAGE = 10_000


def _market(fee_rate_bps: int = 0, min_bet: int = 1, max_bet: int = 10**12) -> Market:
    return create_market(
        market_id="mkt_1",
        creator_id="lp",
        description="Test market",
        resolution_time_ms=10_000,
        min_bet=min_bet,
        max_bet=max_bet,
        fee_rate_bps=fee_rate_bps,
        now_ms=0,
    )


def _pool(market: Market, seed: int = 1_000_000, fee_rate_bps: int = 0) -> Pool:
    return create_pool("pool_1", market, "lp", seed, fee_rate_bps, now_ms=0)


def _bet(market: Market, pool: Pool, side: Side, stake: int, slippage: int = ANY_SLIPPAGE) -> None:
    apply_bet(pool, price_bet(market, pool, side, stake, slippage))


class TestCreatePool:
    def test_even_split(self) -> None:
        pool = _pool(_market())
        assert (pool.yes_reserve, pool.no_reserve) == (500_000, 500_000)
        assert pool.k == 250_000_000_000
        assert pool.custodied_balance == 1_000_000
        assert pool.fees_collected == 0
        assert (pool.yes_liability, pool.no_liability) == (0, 0)

    def test_odd_seed_keeps_remainder_in_custody(self) -> None:
        pool = _pool(_market(), seed=1_001)
        assert (pool.yes_reserve, pool.no_reserve) == (500, 500)
        assert pool.custodied_balance == 1_001

    def test_seed_below_two_rejected(self) -> None:
        with pytest.raises(InvalidPoolParamsError):
            _pool(_market(), seed=1)

    def test_fee_above_par_rejected(self) -> None:
        with pytest.raises(InvalidPoolParamsError):
            _pool(_market(), fee_rate_bps=10_001)

    def test_combined_fee_cap(self) -> None:
        market = _market(fee_rate_bps=4_000)
        with pytest.raises(InvalidPoolParamsError):
            create_pool("pool_1", market, "lp", 1_000, 1_001, now_ms=0, max_total_fee_bps=5_000)
        pool = create_pool("pool_1", market, "lp", 1_000, 1_000, now_ms=0, max_total_fee_bps=5_000)
        assert pool.fee_rate_bps == 1_000

    def test_closed_market_rejected(self) -> None:
        market = _market()
        market.status = MarketStatus.CLOSED
        with pytest.raises(MarketNotOpenError):
            _pool(market)


class TestPriceBet:
    def test_first_yes_bet(self) -> None:
        market = _market()
        pool = _pool(market)
        ex = price_bet(market, pool, Side.YES, 100_000, ANY_SLIPPAGE)
        assert ex.odds_before == 5000
        assert ex.tokens_out == 83_334
        assert (ex.new_yes_reserve, ex.new_no_reserve) == (600_000, 416_666)
        assert ex.odds_after == 4098
        assert ex.slippage_bps == 902
        assert ex.potential_payout == 200_000

    def test_pricing_does_not_mutate(self) -> None:
        market = _market()
        pool = _pool(market)
        before = dataclasses.replace(pool)
        price_bet(market, pool, Side.YES, 100_000, ANY_SLIPPAGE)
        assert pool == before
        assert market.total_volume == 0

    def test_fees_split_off_gross_stake(self) -> None:
        market = _market(fee_rate_bps=100)
        pool = _pool(market, fee_rate_bps=30)
        ex = price_bet(market, pool, Side.YES, 10_000, ANY_SLIPPAGE)
        assert (ex.treasury_fee, ex.pool_fee, ex.effective_stake) == (100, 30, 9_870)
        assert ex.tokens_out == 9_679
        assert (ex.new_yes_reserve, ex.new_no_reserve) == (509_870, 490_321)
        # payout is computed on the gross stake at pre-trade odds
        assert ex.potential_payout == 20_000

    def test_stake_out_of_range(self) -> None:
        market = _market(min_bet=100, max_bet=1_000)
        pool = _pool(market)
        with pytest.raises(InvalidBetAmountError) as exc_info:
            price_bet(market, pool, Side.YES, 99, ANY_SLIPPAGE)
        assert exc_info.value.code == 4004
        assert exc_info.value.message == "Stake 99 must be in [100, 1000]"
        with pytest.raises(InvalidBetAmountError):
            price_bet(market, pool, Side.NO, 1_001, ANY_SLIPPAGE)

    def test_stake_at_bounds_allowed(self) -> None:
        market = _market(min_bet=100, max_bet=1_000)
        pool = _pool(market)
        assert price_bet(market, pool, Side.YES, 100, ANY_SLIPPAGE).stake == 100
        assert price_bet(market, pool, Side.YES, 1_000, ANY_SLIPPAGE).stake == 1_000

    def test_closed_market_rejected(self) -> None:
        market = _market()
        pool = _pool(market)
        market.status = MarketStatus.CLOSED
        with pytest.raises(MarketNotOpenError):
            price_bet(market, pool, Side.YES, 100, ANY_SLIPPAGE)

    def test_slippage_exceeded(self) -> None:
        market = _market()
        pool = _pool(market)
        _bet(market, pool, Side.YES, 100_000)
        before = dataclasses.replace(pool)
        with pytest.raises(SlippageExceededError) as exc_info:
            price_bet(market, pool, Side.NO, 50_000, 50)
        assert exc_info.value.code == 4005
        assert pool == before

    def test_slippage_at_tolerance_allowed(self) -> None:
        market = _market()
        pool = _pool(market)
        ex = price_bet(market, pool, Side.YES, 100_000, 902)
        assert ex.slippage_bps == 902

    def test_reserve_exhaustion(self) -> None:
        market = _market()
        pool = _pool(market, seed=2)
        with pytest.raises(PoolExhaustedError):
            price_bet(market, pool, Side.YES, 10, ANY_SLIPPAGE)
        assert (pool.yes_reserve, pool.no_reserve) == (1, 1)

    def test_cannot_underwrite(self) -> None:
        # payout 2002 against custody 1000 + 1001
        market = _market()
        pool = _pool(market, seed=1_000)
        with pytest.raises(InsufficientLiquidityError) as exc_info:
            price_bet(market, pool, Side.YES, 1_001, ANY_SLIPPAGE)
        assert exc_info.value.code == 4007

    def test_underwrite_exactly_allowed(self) -> None:
        # payout 2000 against custody 1000 + 1000
        market = _market()
        pool = _pool(market, seed=1_000)
        ex = price_bet(market, pool, Side.YES, 1_000, ANY_SLIPPAGE)
        assert ex.potential_payout == 2_000


class TestApplyBet:
    def test_sequence_of_bets(self) -> None:
        market = _market()
        pool = _pool(market)

        _bet(market, pool, Side.YES, 100_000)
        assert (pool.yes_reserve, pool.no_reserve) == (600_000, 416_666)
        assert pool.k == 249_999_600_000
        assert pool.custodied_balance == 1_100_000
        assert pool.yes_liability == 200_000

        ex = price_bet(market, pool, Side.NO, 50_000, 500)
        assert ex.odds_before == 5902
        assert ex.odds_after == 5490
        assert ex.slippage_bps == 412
        assert ex.potential_payout == 84_717
        apply_bet(pool, ex)
        assert (pool.yes_reserve, pool.no_reserve) == (567_948, 466_666)
        assert pool.k == 567_948 * 466_666
        assert pool.custodied_balance == 1_150_000
        assert (pool.yes_liability, pool.no_liability) == (200_000, 84_717)

    def test_pool_fee_accumulates_outside_reserves(self) -> None:
        market = _market(fee_rate_bps=100)
        pool = _pool(market, fee_rate_bps=30)
        _bet(market, pool, Side.YES, 10_000)
        assert pool.fees_collected == 30
        assert pool.custodied_balance == 1_010_000
        assert pool.yes_reserve == 509_870

    def test_odds_move_against_bettor_side(self) -> None:
        market = _market()
        pool = _pool(market)
        ex = price_bet(market, pool, Side.NO, 10_000, ANY_SLIPPAGE)
        apply_bet(pool, ex)
        assert ex.odds_after < ex.odds_before
