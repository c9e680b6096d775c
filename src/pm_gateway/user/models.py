"""User record for the in-memory user store."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass
class User:
    username: str
    email: str
    password_hash: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
