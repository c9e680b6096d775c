"""Pool invariant verification.

INV-K: k == yes_reserve * no_reserve
INV-R: yes_reserve > 0 and no_reserve > 0
INV-L: yes/no liability == sum of live positions' potential payouts per side
INV-S: custodied_balance >= max(yes_liability, no_liability) while the market is
       undecided; once a result is set only the winning side can be paid
"""
import logging
from collections.abc import Iterable

from src.pm_amm.domain.models import Pool
from src.pm_common.enums import Side
from src.pm_position.domain.models import Position

logger = logging.getLogger(__name__)


def verify_pool_invariants(
    pool: Pool, live_positions: Iterable[Position], result: Side | None = None
) -> list[str]:
    """Return violation strings for one pool; empty when all hold.

    ``result`` is the market outcome once resolved; live losing positions
    then carry no claim on custody.
    """
    violations: list[str] = []
    if pool.k != pool.yes_reserve * pool.no_reserve:
        violations.append(
            f"INV-K violated: pool={pool.id} k={pool.k} != "
            f"{pool.yes_reserve} * {pool.no_reserve}"
        )
    if pool.yes_reserve <= 0 or pool.no_reserve <= 0:
        violations.append(
            f"INV-R violated: pool={pool.id} reserves=({pool.yes_reserve}, {pool.no_reserve})"
        )

    yes_due = 0
    no_due = 0
    for position in live_positions:
        if position.pool_id != pool.id:
            continue
        if position.side.is_yes:
            yes_due += position.potential_payout
        else:
            no_due += position.potential_payout
    if (yes_due, no_due) != (pool.yes_liability, pool.no_liability):
        violations.append(
            f"INV-L violated: pool={pool.id} liability=({pool.yes_liability}, "
            f"{pool.no_liability}) != positions=({yes_due}, {no_due})"
        )

    if result is None:
        worst_case = max(yes_due, no_due)
    else:
        worst_case = yes_due if result.is_yes else no_due
    if pool.custodied_balance < worst_case:
        violations.append(
            f"INV-S violated: pool={pool.id} custodied={pool.custodied_balance} "
            f"< worst_case_payout={worst_case}"
        )

    for msg in violations:
        logger.error(msg)
    if not violations:
        logger.debug("Invariants OK: pool=%s k=%d", pool.id, pool.k)
    return violations


def verify_conservation(
    net_deposits: int, user_balances: int, pool_custody: int
) -> list[str]:
    """INV-G: every unit deposited is either in a user account or in a pool."""
    total_assets = user_balances + pool_custody
    if total_assets != net_deposits:
        msg = (
            f"INV-G violated: user_balances({user_balances}) + "
            f"pool_custody({pool_custody}) = {total_assets} != net_deposits={net_deposits}"
        )
        logger.error(msg)
        return [msg]
    return []
