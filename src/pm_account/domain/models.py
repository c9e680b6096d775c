"""Domain models for pm_account: pure dataclasses."""

from dataclasses import dataclass

from src.pm_common.enums import LedgerEntryType


@dataclass
class Account:
    user_id: str
    available_balance: int = 0


@dataclass(frozen=True)
class LedgerEntry:
    id: int                          # sequential per CustodyBook
    user_id: str
    entry_type: LedgerEntryType
    amount: int                      # positive=income negative=expense
    balance_after: int               # available_balance snapshot after op
    reference_id: str | None = None  # pool or position id
    created_at_ms: int = 0
