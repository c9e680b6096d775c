"""Unit tests for constant-product pricing helpers."""

import pytest

from src.pm_amm.domain.pricing import (
    EVEN_ODDS_BPS,
    odds_for,
    potential_payout,
    quote_odds,
    split_fees,
    swap_output,
)
from src.pm_common.enums import Side


class TestQuoteOdds:
    def test_equal_reserves_even_odds(self) -> None:
        assert quote_odds(500_000, 500_000) == (5000, 5000)

    def test_empty_pool_even_odds(self) -> None:
        assert quote_odds(0, 0) == (EVEN_ODDS_BPS, EVEN_ODDS_BPS)

    def test_side_odds_is_opposite_reserve_share(self) -> None:
        # yes_odds = no_reserve share
        yes_odds, no_odds = quote_odds(250, 750)
        assert yes_odds == 7500
        assert no_odds == 2500

    def test_truncation_still_sums_to_par(self) -> None:
        yes_odds, no_odds = quote_odds(1, 2)
        assert yes_odds == 6666
        assert no_odds == 3334

    @pytest.mark.parametrize(
        "yes_reserve,no_reserve",
        [(1, 1), (7, 3), (600_000, 416_666), (1, 10**18), (123_457, 999_983)],
    )
    def test_sums_to_par(self, yes_reserve: int, no_reserve: int) -> None:
        assert sum(quote_odds(yes_reserve, no_reserve)) == 10_000

    def test_odds_for_picks_side(self) -> None:
        assert odds_for(250, 750, Side.YES) == 7500
        assert odds_for(250, 750, Side.NO) == 2500

    def test_query_does_not_change_result(self) -> None:
        assert quote_odds(600_000, 416_666) == quote_odds(600_000, 416_666)


class TestSwapOutput:
    def test_reference_trade(self) -> None:
        # 500_000 - floor(500_000 * 500_000 / 600_000) = 500_000 - 416_666
        assert swap_output(500_000, 500_000, 100_000) == 83_334

    def test_zero_input(self) -> None:
        assert swap_output(1_000, 4_000, 0) == 0

    def test_exact_beyond_64_bits(self) -> None:
        # in_reserve * out_reserve = 2**126, far beyond 64-bit range
        out = swap_output(2**63, 2**63, 2**62)
        assert out == 2**63 - (2**126 // (2**63 + 2**62))
        assert out == 3_074_457_345_618_258_603

    def test_never_exceeds_out_reserve(self) -> None:
        assert swap_output(10, 1_000, 10**12) <= 1_000


class TestFees:
    def test_fees_independent_off_gross(self) -> None:
        fees = split_fees(10_000, 100, 30)
        assert fees.treasury_fee == 100
        assert fees.pool_fee == 30
        assert fees.effective_stake == 9_870

    def test_fees_truncate(self) -> None:
        fees = split_fees(999, 50, 50)
        assert (fees.treasury_fee, fees.pool_fee) == (4, 4)
        assert fees.effective_stake == 991

    def test_no_fees(self) -> None:
        fees = split_fees(100_000, 0, 0)
        assert fees.effective_stake == 100_000


class TestPotentialPayout:
    def test_even_odds_doubles(self) -> None:
        assert potential_payout(100_000, 5000) == 200_000

    def test_truncates(self) -> None:
        # 1000 * 10000 / 3333 = 3000.3 -> 3000
        assert potential_payout(1_000, 3333) == 3_000
