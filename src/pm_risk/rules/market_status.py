from src.pm_common.errors import MarketNotOpenError
from src.pm_market.domain.models import Market


def check_market_open(market: Market) -> None:
    if not market.is_open:
        raise MarketNotOpenError(market.id)
