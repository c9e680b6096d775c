"""Id -> record maps owned by the engine, plus one lock per market.

A pool is bound 1:1 to a market, so the market lock serializes every
mutation touching either record. Positions are looked up here; who holds
them is tracked by the OwnershipTable.
"""
import asyncio

from src.pm_amm.domain.models import Pool
from src.pm_common.enums import MarketStatus
from src.pm_common.errors import (
    MarketNotFoundError,
    PoolAlreadyExistsError,
    PoolNotFoundError,
    PositionNotFoundError,
)
from src.pm_market.domain.models import Market
from src.pm_position.domain.models import Position
from src.pm_position.domain.ownership import OwnershipTable


class Registry:
    def __init__(self) -> None:
        self.markets: dict[str, Market] = {}
        self.pools: dict[str, Pool] = {}
        self.positions: dict[str, Position] = {}
        self.ownership = OwnershipTable()
        self._pool_by_market: dict[str, str] = {}
        self._market_locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, market_id: str) -> asyncio.Lock:
        """The lock is created with its market; unknown ids raise."""
        lock = self._market_locks.get(market_id)
        if lock is None:
            raise MarketNotFoundError(market_id)
        return lock

    # --- markets ---

    def add_market(self, market: Market) -> None:
        self.markets[market.id] = market
        self._market_locks.setdefault(market.id, asyncio.Lock())

    def market(self, market_id: str) -> Market:
        market = self.markets.get(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    def list_markets(
        self, status: MarketStatus | None = None, category: str | None = None
    ) -> list[Market]:
        """Newest first."""
        items = [
            m
            for m in self.markets.values()
            if (status is None or m.status == status)
            and (category is None or m.category == category)
        ]
        return sorted(items, key=lambda m: (m.created_at_ms, m.id), reverse=True)

    # --- pools ---

    def add_pool(self, pool: Pool) -> None:
        if pool.market_id in self._pool_by_market:
            raise PoolAlreadyExistsError(pool.market_id)
        self.pools[pool.id] = pool
        self._pool_by_market[pool.market_id] = pool.id

    def has_pool(self, market_id: str) -> bool:
        return market_id in self._pool_by_market

    def pool(self, pool_id: str) -> Pool:
        pool = self.pools.get(pool_id)
        if pool is None:
            raise PoolNotFoundError(pool_id)
        return pool

    def pool_for_market(self, market_id: str) -> Pool:
        pool_id = self._pool_by_market.get(market_id)
        if pool_id is None:
            raise PoolNotFoundError(f"market={market_id}")
        return self.pools[pool_id]

    # --- positions ---

    def add_position(self, position: Position) -> None:
        self.ownership.register(position.id, position.owner_id)
        self.positions[position.id] = position

    def position(self, position_id: str) -> Position:
        position = self.positions.get(position_id)
        if position is None:
            raise PositionNotFoundError(position_id)
        return position

    def remove_position(self, position_id: str) -> Position:
        position = self.position(position_id)
        self.ownership.release(position_id)
        del self.positions[position_id]
        return position

    def positions_of(self, owner_id: str) -> list[Position]:
        return sorted(
            (self.positions[pid] for pid in self.ownership.positions_of(owner_id)),
            key=lambda p: (p.purchase_time_ms, p.id),
        )

    def live_positions(self) -> list[Position]:
        return list(self.positions.values())
