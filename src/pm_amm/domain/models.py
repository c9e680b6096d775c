"""Domain models for pm_amm: pure dataclasses."""

from dataclasses import dataclass


@dataclass
class Pool:
    id: str
    market_id: str                 # bound 1:1 for the pool's lifetime
    creator_id: str
    yes_reserve: int
    no_reserve: int
    k: int                         # yes_reserve * no_reserve, recomputed after every mutation
    fee_rate_bps: int
    custodied_balance: int         # seed + gross stakes - payouts
    created_at_ms: int
    fees_collected: int = 0        # cumulative pool fee, never reinjected into reserves
    yes_liability: int = 0         # outstanding potential payouts on YES positions
    no_liability: int = 0          # outstanding potential payouts on NO positions
