"""
Ownership scoping for user-owned resources.

Every read, update and delete of a meal, entry, goal or profile passes through
``require_owner``. A resource that does not exist and one owned by somebody
else produce the same AuthorizationError, so callers learn nothing about other
users' ids.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from app.exceptions import AuthorizationError

logger = logging.getLogger("nutrition_tracker.authorization")

T = TypeVar("T")


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, passed explicitly into handlers and services."""

    user_id: int


def authorize(resource_owner_user_id: Optional[int], caller_user_id: Optional[int]) -> bool:
    if resource_owner_user_id is None or caller_user_id is None:
        return False
    return resource_owner_user_id == caller_user_id


def owner_of(resource: Any) -> Optional[int]:
    """Owner of meals and goals: their ``user_id`` column."""
    return getattr(resource, "user_id", None)


def entry_owner_id(entry: Any) -> Optional[int]:
    """Owner of a meal entry, resolved through its parent meal."""
    meal = getattr(entry, "meal", None)
    if meal is None:
        return None
    return owner_of(meal)


def require_owner(
    resource: Optional[T],
    identity: Identity,
    *,
    resource_name: str = "Resource",
    owner: Callable[[Any], Optional[int]] = owner_of,
) -> T:
    """Return ``resource`` if ``identity`` owns it, otherwise raise AuthorizationError."""
    owner_id = owner(resource) if resource is not None else None
    if not authorize(owner_id, identity.user_id):
        logger.debug(
            f"access_denied resource={resource_name} caller={identity.user_id} "
            f"exists={resource is not None}"
        )
        raise AuthorizationError(f"{resource_name} not found")
    return resource
