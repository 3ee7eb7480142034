"""
Event Grouping Helpers

Shared filtering and grouping used by every rail's grouper.
"""

from typing import Callable, Iterable

from ..models import PaymentRequestEvent, PaymentRequestEventType, as_utc


def _insertion_order(event: PaymentRequestEvent):
    # Events without a timestamp sort first; timestamps are never compared to None.
    return (event.inserted is not None, as_utc(event.inserted))


def group_events(
    events: Iterable[PaymentRequestEvent],
    event_types: frozenset,
    key: Callable[[PaymentRequestEvent], str | None],
) -> dict[str, list[PaymentRequestEvent]]:
    """
    Group events of the given types by correlation key.

    Events with an empty key are dropped. Each group is in insertion order
    and groups are ordered by their earliest event.
    """
    matching = [e for e in events if e.event_type in event_types and key(e)]

    groups: dict[str, list[PaymentRequestEvent]] = {}
    for event in sorted(matching, key=_insertion_order):
        groups.setdefault(key(event), []).append(event)
    return groups


def first_of(
    events: list[PaymentRequestEvent], *event_types: PaymentRequestEventType
) -> PaymentRequestEvent | None:
    """Return the earliest event of the first listed type that is present."""
    for event_type in event_types:
        for event in events:
            if event.event_type == event_type:
                return event
    return None
