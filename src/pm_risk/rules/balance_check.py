from src.pm_common.errors import InsufficientBalanceError, InsufficientLiquidityError


def check_balance(required: int, available: int) -> None:
    if available < required:
        raise InsufficientBalanceError(required, available)


def check_pool_can_underwrite(
    custodied_after: int, yes_liability_after: int, no_liability_after: int
) -> None:
    """Custody after the bet must cover the worst-case outcome's payouts."""
    worst_case = max(yes_liability_after, no_liability_after)
    if custodied_after < worst_case:
        raise InsufficientLiquidityError(worst_case, custodied_after)
