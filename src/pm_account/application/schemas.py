"""Pydantic schemas and cursor utilities for pm_account API."""

import base64
import json

from pydantic import BaseModel, Field

from src.pm_account.domain.models import LedgerEntry
from src.pm_common.basis_points import MAX_AMOUNT

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a ledger entry id into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="Amount to deposit")


class WithdrawRequest(BaseModel):
    amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="Amount to withdraw")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    user_id: str
    available_balance: int


class MovementResponse(BaseModel):
    """Result of a deposit or withdrawal."""

    available_balance: int
    amount: int
    ledger_entry_id: int

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "MovementResponse":
        return cls(
            available_balance=entry.balance_after,
            amount=abs(entry.amount),
            ledger_entry_id=entry.id,
        )


class LedgerEntryItem(BaseModel):
    id: int
    entry_type: str
    amount: int
    balance_after: int
    reference_id: str | None
    created_at_ms: int

    @classmethod
    def from_domain(cls, e: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=e.id,
            entry_type=e.entry_type.value,
            amount=e.amount,
            balance_after=e.balance_after,
            reference_id=e.reference_id,
            created_at_ms=e.created_at_ms,
        )


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool
