"""Domain models for pm_position: the position claim and its token decoration."""

from dataclasses import dataclass

from src.pm_common.enums import Side


@dataclass(frozen=True)
class ClaimTerms:
    """The tuple external marketplace/yield modules read off a position."""

    market_id: str
    side: Side
    amount: int
    odds_at_purchase: int
    potential_payout: int


@dataclass
class Position:
    """A redeemable claim minted by a bet. Financial terms never change.

    ``owner_id`` is maintained by the OwnershipTable; transfers go through it.
    The display/yield fields are the transferable-token decoration: they are
    read and written by external modules and ignored by pricing and settlement.
    """

    id: str
    market_id: str
    pool_id: str
    owner_id: str
    side: Side
    amount: int                 # gross stake; principal after fees is derived from the pool's rates
    odds_at_purchase: int       # bps, pre-trade odds of ``side``
    potential_payout: int       # fixed at mint
    purchase_time_ms: int
    display_uri: str | None = None
    yield_enabled: bool = False
    yield_strategy_id: str | None = None

    def claim_terms(self) -> ClaimTerms:
        return ClaimTerms(
            market_id=self.market_id,
            side=self.side,
            amount=self.amount,
            odds_at_purchase=self.odds_at_purchase,
            potential_payout=self.potential_payout,
        )

    def set_yield(self, enabled: bool, strategy_id: str | None = None) -> None:
        """Attach or detach the yield flag. Detaching clears the strategy id."""
        self.yield_enabled = enabled
        self.yield_strategy_id = strategy_id if enabled else None

    def set_display_uri(self, uri: str | None) -> None:
        self.display_uri = uri
