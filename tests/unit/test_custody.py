"""Unit tests for the in-memory custody book."""

import pytest

from src.pm_account.domain.custody import CustodyBook
from src.pm_common.enums import LedgerEntryType
from src.pm_common.errors import InsufficientBalanceError, InvalidAmountError


class TestBalances:
    def test_unknown_user_has_zero(self) -> None:
        assert CustodyBook().balance_of("ghost") == 0

    def test_open_account(self) -> None:
        book = CustodyBook()
        account = book.open_account("alice")
        assert account.available_balance == 0
        assert book.open_account("alice") is account

    def test_deposit_and_withdraw(self) -> None:
        book = CustodyBook()
        book.deposit("alice", 1_000, now_ms=5)
        entry = book.withdraw("alice", 300, now_ms=6)
        assert book.balance_of("alice") == 700
        assert entry.amount == -300
        assert entry.balance_after == 700
        assert entry.created_at_ms == 6

    def test_overdraw_rejected(self) -> None:
        book = CustodyBook()
        book.deposit("alice", 100)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            book.debit("alice", 101, LedgerEntryType.BET_STAKE, "pos_1")
        assert exc_info.value.code == 2001
        assert book.balance_of("alice") == 100
        assert len(book.entries_for("alice")) == 1

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount_rejected(self, amount: int) -> None:
        book = CustodyBook()
        with pytest.raises(InvalidAmountError):
            book.deposit("alice", amount)
        with pytest.raises(InvalidAmountError):
            book.withdraw("alice", amount)


class TestLedger:
    def test_newest_first_with_cursor(self) -> None:
        book = CustodyBook()
        for amount in (10, 20, 30):
            book.deposit("alice", amount)
        book.deposit("bob", 99)

        page = book.entries_for("alice", limit=2)
        assert [e.amount for e in page] == [30, 20]
        rest = book.entries_for("alice", before_id=page[-1].id, limit=2)
        assert [e.amount for e in rest] == [10]

    def test_filter_by_type(self) -> None:
        book = CustodyBook()
        book.deposit("alice", 1_000)
        book.debit("alice", 400, LedgerEntryType.POOL_SEED, "pool_1")
        seeds = book.entries_for("alice", entry_type=LedgerEntryType.POOL_SEED)
        assert len(seeds) == 1
        assert seeds[0].reference_id == "pool_1"

    def test_net_deposits_ignores_internal_moves(self) -> None:
        book = CustodyBook()
        book.deposit("alice", 1_000)
        book.deposit("bob", 500)
        book.withdraw("bob", 200)
        book.debit("alice", 400, LedgerEntryType.BET_STAKE, "pos_1")
        book.credit("alice", 800, LedgerEntryType.SETTLEMENT_PAYOUT, "pos_1")
        assert book.net_deposits() == 1_300
        assert book.total_user_balances() == 1_700
