"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Account:
    id: str
    username: str
    password_hash: str = field(repr=False)
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def owner_id(self) -> str:
        # an account is the owner of itself for authorization purposes
        return self.id


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
    email: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    username: Optional[str] | object = UNSET
    email: Optional[str] | object = UNSET
    password: Optional[str] | object = UNSET

    def provided(self) -> dict[str, object]:
        return {
            name: value
            for name, value in (
                ("username", self.username),
                ("email", self.email),
                ("password", self.password),
            )
            if value is not UNSET and value not in (None, "")
        }
