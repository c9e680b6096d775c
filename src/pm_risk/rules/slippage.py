from src.pm_common.errors import SlippageExceededError


def check_slippage(odds_before: int, odds_after: int, max_slippage_bps: int) -> int:
    """Return the drift |before - after| in bps; raise if above tolerance.

    Tolerance is a maximum drift from the pre-trade quote, not a limit price.
    """
    drift = abs(odds_before - odds_after)
    if drift > max_slippage_bps:
        raise SlippageExceededError(drift, max_slippage_bps)
    return drift
