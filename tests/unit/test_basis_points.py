"""Tests for pm_common.basis_points."""

from src.pm_common.basis_points import apply_bps, bps_to_display


class TestApplyBps:
    def test_exact(self) -> None:
        assert apply_bps(10_000, 100) == 100

    def test_truncates_toward_zero(self) -> None:
        # 999 * 30 / 10000 = 2.997 -> 2
        assert apply_bps(999, 30) == 2

    def test_small_amount_rounds_to_zero(self) -> None:
        assert apply_bps(3, 30) == 0

    def test_zero_rate(self) -> None:
        assert apply_bps(1_000_000, 0) == 0

    def test_full_rate(self) -> None:
        assert apply_bps(12_345, 10_000) == 12_345


class TestDisplay:
    def test_half(self) -> None:
        assert bps_to_display(5000) == "50.00%"

    def test_small(self) -> None:
        assert bps_to_display(30) == "0.30%"
