"""ExchangeEngine: stateful orchestrator for markets, pools and positions.

Every mutating operation runs under the lock of the market it touches and
performs all validation before the first write, so a failed call leaves
market, pool, positions and custody exactly as they were. Events are
emitted after the writes; a failing sink is logged and otherwise ignored.
"""
import logging
from typing import Any

from src.pm_account.domain.custody import CustodyBook
from src.pm_amm.domain.bet_service import BetExecution, apply_bet, create_pool, price_bet
from src.pm_amm.domain.models import Pool
from src.pm_amm.domain.pricing import quote_odds
from src.pm_clearing.domain.invariants import verify_conservation, verify_pool_invariants
from src.pm_clearing.domain.settlement import (
    SettlementResult,
    apply_settlement,
    compute_settlement,
)
from src.pm_common.basis_points import BPS_DENOMINATOR
from src.pm_common.clock import Clock, SystemClock
from src.pm_common.enums import EventType, LedgerEntryType, MarketStatus, Side
from src.pm_common.errors import InvalidTransferError, PoolAlreadyExistsError
from src.pm_common.events import DomainEvent, EventSink, LoggingEventSink
from src.pm_common.id_generator import SnowflakeIdGenerator
from src.pm_engine.registry import Registry
from src.pm_market.domain import lifecycle
from src.pm_market.domain.models import Market
from src.pm_position.domain.models import Position
from src.pm_risk.rules.balance_check import check_balance

logger = logging.getLogger(__name__)


class ExchangeEngine:
    def __init__(
        self,
        custody: CustodyBook | None = None,
        clock: Clock | None = None,
        sink: EventSink | None = None,
        id_generator: SnowflakeIdGenerator | None = None,
        max_total_fee_bps: int = BPS_DENOMINATOR,
        min_seed_amount: int = 2,
    ) -> None:
        self.registry = Registry()
        self.custody = custody or CustodyBook()
        self.clock: Clock = clock or SystemClock()
        self._sink: EventSink = sink or LoggingEventSink()
        self._ids = id_generator or SnowflakeIdGenerator()
        self._max_total_fee_bps = max_total_fee_bps
        self._min_seed_amount = min_seed_amount

    # ------------------------------------------------------------------
    # Markets
    # ------------------------------------------------------------------

    async def create_market(
        self,
        creator_id: str,
        description: str,
        resolution_time_ms: int,
        min_bet: int,
        max_bet: int,
        fee_rate_bps: int,
        category: str | None = None,
        resolution_source: str | None = None,
    ) -> Market:
        now = self.clock.now_ms()
        market = lifecycle.create_market(
            market_id=self._ids.next_id("mkt_"),
            creator_id=creator_id,
            description=description,
            resolution_time_ms=resolution_time_ms,
            min_bet=min_bet,
            max_bet=max_bet,
            fee_rate_bps=fee_rate_bps,
            now_ms=now,
            category=category,
            resolution_source=resolution_source,
        )
        self.registry.add_market(market)
        self._emit(EventType.MARKET_CREATED, market.id, now, {"creator": creator_id})
        return market

    def get_market(self, market_id: str) -> Market:
        return self.registry.market(market_id)

    def list_markets(
        self, status: MarketStatus | None = None, category: str | None = None
    ) -> list[Market]:
        return self.registry.list_markets(status, category)

    async def close_market(self, market_id: str, caller_id: str) -> Market:
        async with self.registry.lock_for(market_id):
            market = self.registry.market(market_id)
            now = self.clock.now_ms()
            lifecycle.close_market(market, caller_id, now)
        self._emit(EventType.MARKET_CLOSED, market.id, now, {"status": market.status.value})
        return market

    async def resolve_market(self, market_id: str, caller_id: str, outcome: Side) -> Market:
        async with self.registry.lock_for(market_id):
            market = self.registry.market(market_id)
            now = self.clock.now_ms()
            lifecycle.resolve_market(market, caller_id, outcome, now)
        self._emit(
            EventType.MARKET_RESOLVED,
            market.id,
            now,
            {"status": market.status.value, "result": outcome.value},
        )
        return market

    async def dispute_market(self, market_id: str, caller_id: str) -> Market:
        async with self.registry.lock_for(market_id):
            market = self.registry.market(market_id)
            lifecycle.dispute_market(market)
        self._emit(
            EventType.MARKET_DISPUTED,
            market.id,
            self.clock.now_ms(),
            {"status": market.status.value, "by": caller_id},
        )
        return market

    # ------------------------------------------------------------------
    # Pools
    # ------------------------------------------------------------------

    async def create_pool(
        self, market_id: str, creator_id: str, seed_amount: int, fee_rate_bps: int
    ) -> Pool:
        async with self.registry.lock_for(market_id):
            market = self.registry.market(market_id)
            if self.registry.has_pool(market_id):
                raise PoolAlreadyExistsError(market_id)
            now = self.clock.now_ms()
            pool = create_pool(
                pool_id=self._ids.next_id("pool_"),
                market=market,
                creator_id=creator_id,
                seed_amount=seed_amount,
                fee_rate_bps=fee_rate_bps,
                now_ms=now,
                max_total_fee_bps=self._max_total_fee_bps,
                min_seed_amount=self._min_seed_amount,
            )
            check_balance(seed_amount, self.custody.balance_of(creator_id))

            self.custody.debit(creator_id, seed_amount, LedgerEntryType.POOL_SEED, pool.id, now)
            self.registry.add_pool(pool)
        self._emit(
            EventType.POOL_CREATED,
            pool.id,
            now,
            {"market_id": market_id, "seed": seed_amount, "fee_rate_bps": fee_rate_bps},
        )
        return pool

    def get_pool(self, pool_id: str) -> Pool:
        return self.registry.pool(pool_id)

    def get_pool_for_market(self, market_id: str) -> Pool:
        return self.registry.pool_for_market(market_id)

    def quote_odds(self, pool_id: str) -> tuple[int, int]:
        pool = self.registry.pool(pool_id)
        return quote_odds(pool.yes_reserve, pool.no_reserve)

    # ------------------------------------------------------------------
    # Bets
    # ------------------------------------------------------------------

    def preview_bet(
        self, pool_id: str, side: Side, stake: int, max_slippage_bps: int
    ) -> BetExecution:
        """Price a bet exactly as place_bet would, without executing it."""
        pool = self.registry.pool(pool_id)
        market = self.registry.market(pool.market_id)
        return price_bet(market, pool, side, stake, max_slippage_bps)

    async def place_bet(
        self,
        pool_id: str,
        bettor_id: str,
        side: Side,
        stake: int,
        max_slippage_bps: int,
    ) -> Position:
        pool = self.registry.pool(pool_id)
        async with self.registry.lock_for(pool.market_id):
            market = self.registry.market(pool.market_id)
            execution = price_bet(market, pool, side, stake, max_slippage_bps)
            check_balance(stake, self.custody.balance_of(bettor_id))

            now = self.clock.now_ms()
            position = Position(
                id=self._ids.next_id("pos_"),
                market_id=market.id,
                pool_id=pool.id,
                owner_id=bettor_id,
                side=side,
                amount=stake,
                odds_at_purchase=execution.odds_before,
                potential_payout=execution.potential_payout,
                purchase_time_ms=now,
            )
            self.custody.debit(bettor_id, stake, LedgerEntryType.BET_STAKE, position.id, now)
            apply_bet(pool, execution)
            lifecycle.record_volume(market, stake)
            self.registry.add_position(position)

        logger.info(
            "Bet placed: pool=%s side=%s stake=%d odds=%d->%d payout=%d",
            pool.id, side.value, stake,
            execution.odds_before, execution.odds_after, execution.potential_payout,
        )
        self._emit(
            EventType.BET_PLACED,
            position.id,
            now,
            {
                "pool_id": pool.id,
                "market_id": market.id,
                "owner": bettor_id,
                "side": side.value,
                "stake": stake,
                "odds_before": execution.odds_before,
                "odds_after": execution.odds_after,
                "potential_payout": execution.potential_payout,
            },
        )
        return position

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def get_position(self, position_id: str) -> Position:
        return self.registry.position(position_id)

    def positions_of(self, owner_id: str) -> list[Position]:
        return self.registry.positions_of(owner_id)

    async def redeem(self, position_id: str, caller_id: str) -> SettlementResult:
        """Consume a position; winners are paid its fixed potential payout."""
        position = self.registry.position(position_id)
        async with self.registry.lock_for(position.market_id):
            # re-read under the lock: a concurrent redeem may have consumed it
            position = self.registry.position(position_id)
            self.registry.ownership.require_owner(position_id, caller_id)
            market = self.registry.market(position.market_id)
            pool = self.registry.pool(position.pool_id)
            result = compute_settlement(market, pool, position)

            now = self.clock.now_ms()
            apply_settlement(pool, position, result)
            if result.payout > 0:
                self.custody.credit(
                    result.owner_id,
                    result.payout,
                    LedgerEntryType.SETTLEMENT_PAYOUT,
                    position_id,
                    now,
                )
            self.registry.remove_position(position_id)

        self._emit(
            EventType.POSITION_SETTLED,
            position_id,
            now,
            {"owner": result.owner_id, "win": result.win, "payout": result.payout},
        )
        return result

    async def transfer_position(self, position_id: str, caller_id: str, to_id: str) -> Position:
        position = self.registry.position(position_id)
        async with self.registry.lock_for(position.market_id):
            position = self.registry.position(position_id)
            if not to_id:
                raise InvalidTransferError("recipient is required")
            self.registry.ownership.transfer(position_id, caller_id, to_id)
            position.owner_id = to_id
        self._emit(
            EventType.POSITION_TRANSFERRED,
            position_id,
            self.clock.now_ms(),
            {"from": caller_id, "to": to_id},
        )
        return position

    async def set_position_token_fields(
        self,
        position_id: str,
        caller_id: str,
        yield_enabled: bool,
        yield_strategy_id: str | None = None,
        display_uri: str | None = None,
    ) -> Position:
        """Owner-only replacement of the token decoration; financial terms are untouched.

        All three fields are written, so ``display_uri=None`` clears the URI.
        """
        position = self.registry.position(position_id)
        async with self.registry.lock_for(position.market_id):
            self.registry.ownership.require_owner(position_id, caller_id)
            position.set_yield(yield_enabled, yield_strategy_id)
            position.set_display_uri(display_uri)
        return position

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def verify_invariants(self) -> list[str]:
        violations: list[str] = []
        live = self.registry.live_positions()
        for pool in self.registry.pools.values():
            result = self.registry.market(pool.market_id).result
            violations.extend(verify_pool_invariants(pool, live, result))
        pool_custody = sum(p.custodied_balance for p in self.registry.pools.values())
        violations.extend(
            verify_conservation(
                self.custody.net_deposits(),
                self.custody.total_user_balances(),
                pool_custody,
            )
        )
        return violations

    # ------------------------------------------------------------------

    def _emit(
        self, event_type: EventType, subject_id: str, now_ms: int, payload: dict[str, Any]
    ) -> None:
        event = DomainEvent(event_type, subject_id, now_ms, payload)
        try:
            self._sink.emit(event)
        except Exception:
            logger.exception("Event sink failed for %s %s", event_type.value, subject_id)
