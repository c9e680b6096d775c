from src.pm_common.errors import InvalidBetAmountError
from src.pm_market.domain.models import Market


def check_bet_amount(market: Market, stake: int) -> None:
    """Raise InvalidBetAmountError(4004) if stake is not in [min_bet, max_bet]."""
    if not (market.min_bet <= stake <= market.max_bet):
        raise InvalidBetAmountError(stake, market.min_bet, market.max_bet)
