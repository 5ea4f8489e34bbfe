"""Single authorization predicate shared by every resource-scoped operation."""

from __future__ import annotations

from typing import Protocol, Union

from app.core.errors import AuthorizationError


class Owned(Protocol):
    @property
    def owner_id(self) -> str:
        ...


Resource = Union[Owned, str]


def can_access(account_id: str, resource: Resource) -> bool:
    """Return True when ``account_id`` owns ``resource``.

    ``resource`` is either an object exposing ``owner_id`` or the owner id
    itself (used for account-scoped routes where the target id is the owner).
    """
    owner_id = resource if isinstance(resource, str) else resource.owner_id
    return str(owner_id) == str(account_id)


def ensure_access(
    account_id: str,
    resource: Resource,
    error: type[AuthorizationError] = AuthorizationError,
) -> None:
    if not can_access(account_id, resource):
        raise error()


__all__ = ["Owned", "can_access", "ensure_access"]
