"""In-memory asset custody: per-user balances plus an append-only ledger.

Pools hold their own ``custodied_balance``; moving funds into or out of a
pool is a debit or credit on the user side paired with the pool field update
done by the engine under the same market lock.
"""
import itertools
import logging

from src.pm_account.domain.models import Account, LedgerEntry
from src.pm_common.enums import LedgerEntryType
from src.pm_common.errors import InsufficientBalanceError, InvalidAmountError

logger = logging.getLogger(__name__)


class CustodyBook:
    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._entries: list[LedgerEntry] = []
        self._entry_seq = itertools.count(1)

    def _account(self, user_id: str) -> Account:
        account = self._accounts.get(user_id)
        if account is None:
            account = Account(user_id=user_id)
            self._accounts[user_id] = account
        return account

    def open_account(self, user_id: str) -> Account:
        return self._account(user_id)

    def balance_of(self, user_id: str) -> int:
        account = self._accounts.get(user_id)
        return account.available_balance if account else 0

    def credit(
        self,
        user_id: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str | None = None,
        now_ms: int = 0,
    ) -> LedgerEntry:
        if amount <= 0:
            raise InvalidAmountError(amount)
        account = self._account(user_id)
        account.available_balance += amount
        return self._write(account, entry_type, amount, reference_id, now_ms)

    def debit(
        self,
        user_id: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str | None = None,
        now_ms: int = 0,
    ) -> LedgerEntry:
        if amount <= 0:
            raise InvalidAmountError(amount)
        account = self._account(user_id)
        if account.available_balance < amount:
            raise InsufficientBalanceError(amount, account.available_balance)
        account.available_balance -= amount
        return self._write(account, entry_type, -amount, reference_id, now_ms)

    def deposit(self, user_id: str, amount: int, now_ms: int = 0) -> LedgerEntry:
        return self.credit(user_id, amount, LedgerEntryType.DEPOSIT, now_ms=now_ms)

    def withdraw(self, user_id: str, amount: int, now_ms: int = 0) -> LedgerEntry:
        return self.debit(user_id, amount, LedgerEntryType.WITHDRAW, now_ms=now_ms)

    def entries_for(
        self,
        user_id: str,
        entry_type: LedgerEntryType | None = None,
        before_id: int | None = None,
        limit: int = 20,
    ) -> list[LedgerEntry]:
        """Newest first; ``before_id`` is the id-cursor of the previous page."""
        items = [
            e
            for e in reversed(self._entries)
            if e.user_id == user_id
            and (entry_type is None or e.entry_type == entry_type)
            and (before_id is None or e.id < before_id)
        ]
        return items[:limit]

    def total_user_balances(self) -> int:
        return sum(a.available_balance for a in self._accounts.values())

    def net_deposits(self) -> int:
        return sum(
            e.amount
            for e in self._entries
            if e.entry_type in (LedgerEntryType.DEPOSIT, LedgerEntryType.WITHDRAW)
        )

    def _write(
        self,
        account: Account,
        entry_type: LedgerEntryType,
        amount: int,
        reference_id: str | None,
        now_ms: int,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            id=next(self._entry_seq),
            user_id=account.user_id,
            entry_type=entry_type,
            amount=amount,
            balance_after=account.available_balance,
            reference_id=reference_id,
            created_at_ms=now_ms,
        )
        self._entries.append(entry)
        logger.debug(
            "Ledger %s user=%s amount=%d balance=%d",
            entry_type.value, account.user_id, amount, account.available_balance,
        )
        return entry
