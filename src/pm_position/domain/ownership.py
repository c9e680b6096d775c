"""Single-owner table for live positions.

Each position id has exactly one owner while it is live. Minting registers
it, transfer moves it between owners, redemption is the only way out.
"""

from collections import defaultdict

from src.pm_common.errors import (
    InvalidTransferError,
    NotPositionOwnerError,
    PositionNotFoundError,
)


class OwnershipTable:
    def __init__(self) -> None:
        self._owner_of: dict[str, str] = {}
        self._held_by: dict[str, set[str]] = defaultdict(set)

    def __contains__(self, position_id: object) -> bool:
        return position_id in self._owner_of

    def __len__(self) -> int:
        return len(self._owner_of)

    def register(self, position_id: str, owner_id: str) -> None:
        if position_id in self._owner_of:
            raise InvalidTransferError(f"position {position_id} is already live")
        self._owner_of[position_id] = owner_id
        self._held_by[owner_id].add(position_id)

    def owner_of(self, position_id: str) -> str:
        try:
            return self._owner_of[position_id]
        except KeyError:
            raise PositionNotFoundError(position_id) from None

    def positions_of(self, owner_id: str) -> frozenset[str]:
        return frozenset(self._held_by.get(owner_id, ()))

    def require_owner(self, position_id: str, caller_id: str) -> None:
        if self.owner_of(position_id) != caller_id:
            raise NotPositionOwnerError(position_id)

    def transfer(self, position_id: str, from_id: str, to_id: str) -> None:
        self.require_owner(position_id, from_id)
        if from_id == to_id:
            raise InvalidTransferError("sender and recipient are the same")
        self._held_by[from_id].discard(position_id)
        if not self._held_by[from_id]:
            del self._held_by[from_id]
        self._held_by[to_id].add(position_id)
        self._owner_of[position_id] = to_id

    def release(self, position_id: str) -> str:
        """Remove a consumed position; returns its last owner."""
        owner_id = self.owner_of(position_id)
        del self._owner_of[position_id]
        self._held_by[owner_id].discard(position_id)
        if not self._held_by[owner_id]:
            del self._held_by[owner_id]
        return owner_id
