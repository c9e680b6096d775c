"""Global enums shared by the exchange modules."""

from enum import Enum


class MarketStatus(str, Enum):
    """Lifecycle order: OPEN -> CLOSED -> RESOLVED -> DISPUTED."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    RESOLVED = "RESOLVED"
    DISPUTED = "DISPUTED"


# Position in the lifecycle; a transition may only increase the rank.
MARKET_STATUS_RANK: dict[MarketStatus, int] = {
    MarketStatus.OPEN: 0,
    MarketStatus.CLOSED: 1,
    MarketStatus.RESOLVED: 2,
    MarketStatus.DISPUTED: 3,
}


class Side(str, Enum):
    YES = "YES"
    NO = "NO"

    @property
    def is_yes(self) -> bool:
        return self is Side.YES


class LedgerEntryType(str, Enum):
    # Deposit/Withdraw
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    # Pool custody (user side)
    POOL_SEED = "POOL_SEED"
    BET_STAKE = "BET_STAKE"
    # Settlement
    SETTLEMENT_PAYOUT = "SETTLEMENT_PAYOUT"


class EventType(str, Enum):
    MARKET_CREATED = "MARKET_CREATED"
    MARKET_CLOSED = "MARKET_CLOSED"
    MARKET_RESOLVED = "MARKET_RESOLVED"
    MARKET_DISPUTED = "MARKET_DISPUTED"
    POOL_CREATED = "POOL_CREATED"
    BET_PLACED = "BET_PLACED"
    POSITION_SETTLED = "POSITION_SETTLED"
    POSITION_TRANSFERRED = "POSITION_TRANSFERRED"
