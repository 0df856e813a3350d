"""Listing lifecycle.

Both listing kinds share one transition table. An owner may only move a
listing along an edge of this table; admins bypass it through the
moderation endpoints.
"""
import logging

from immoauto.core.errors import ForbiddenError
from immoauto.models.listing import ListingStatus

logger = logging.getLogger(__name__)

TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.draft: frozenset({ListingStatus.active, ListingStatus.inactive}),
    ListingStatus.active: frozenset(
        {ListingStatus.draft, ListingStatus.sold, ListingStatus.rented, ListingStatus.inactive}
    ),
    ListingStatus.sold: frozenset({ListingStatus.inactive}),
    ListingStatus.rented: frozenset({ListingStatus.inactive}),
    ListingStatus.inactive: frozenset({ListingStatus.active, ListingStatus.draft}),
}


def can_transition(current: ListingStatus, requested: ListingStatus) -> bool:
    return requested in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: ListingStatus, requested: ListingStatus) -> None:
    if not can_transition(current, requested):
        logger.warning("rejected status transition %s -> %s", current.value, requested.value)
        raise ForbiddenError(f"Cannot change status from {current.value} to {requested.value}")
