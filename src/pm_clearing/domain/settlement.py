"""Position settlement: pay the winning side out of pool custody."""
import logging
from dataclasses import dataclass

from src.pm_amm.domain.models import Pool
from src.pm_common.enums import MarketStatus
from src.pm_common.errors import MarketNotResolvedError, PoolInsolventError
from src.pm_market.domain.models import Market
from src.pm_position.domain.models import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
    position_id: str
    owner_id: str
    win: bool
    payout: int


def compute_settlement(market: Market, pool: Pool, position: Position) -> SettlementResult:
    """Validate and compute the payout without mutating anything.

    Redemption needs status RESOLVED exactly; a DISPUTED market is frozen.
    """
    if market.status != MarketStatus.RESOLVED or market.result is None:
        raise MarketNotResolvedError(market.id)
    win = position.side == market.result
    payout = position.potential_payout if win else 0
    if payout > pool.custodied_balance:
        logger.critical(
            "Solvency violated: pool=%s payout=%d custodied=%d",
            pool.id, payout, pool.custodied_balance,
        )
        raise PoolInsolventError(pool.id, payout, pool.custodied_balance)
    return SettlementResult(
        position_id=position.id,
        owner_id=position.owner_id,
        win=win,
        payout=payout,
    )


def apply_settlement(pool: Pool, position: Position, result: SettlementResult) -> None:
    """Release the position's liability and withdraw the payout from custody."""
    pool.custodied_balance -= result.payout
    if position.side.is_yes:
        pool.yes_liability -= position.potential_payout
    else:
        pool.no_liability -= position.potential_payout
