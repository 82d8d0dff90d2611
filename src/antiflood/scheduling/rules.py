"""Built-in anti-flood rules.

A rule is any callable ``(results, messages, candidate) -> timedelta``:

* ``results`` – entries computed so far in the current pass,
* ``messages`` – every registered message, in insertion order,
* ``candidate`` – the message being scheduled.

It returns the extra delay that must be added to ``candidate.requested_at``
for its constraint to hold, ``timedelta(0)`` when nothing conflicts.  Rules
must be pure: the scheduler calls each of them once per message on every
retrieval.

Example::

    def business_hours(results, messages, candidate):
        if candidate.requested_at.hour < 9:
            return candidate.requested_at.replace(hour=9) - candidate.requested_at
        return timedelta(0)

    scheduler.add_rule(business_hours)
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from antiflood.config.settings import AntiFloodSettings
from antiflood.kernel.errors import InvalidArgumentError
from antiflood.scheduling.models import (
    Message,
    ProcessedMessage,
    ScheduleEntry,
    processed_messages,
)

type Rule = Callable[[Sequence[ScheduleEntry], Sequence[Message], Message], timedelta]

_NO_DELAY = timedelta(0)


def _require_arguments(
    results: Sequence[ScheduleEntry] | None,
    messages: Sequence[Message] | None,
    candidate: Message | None,
) -> None:
    if candidate is None:
        raise InvalidArgumentError("candidate message is required", argument="candidate")
    if results is None:
        raise InvalidArgumentError("results collection is required", argument="results")
    if messages is None:
        raise InvalidArgumentError("registered messages collection is required", argument="messages")


def _absolute_difference(start: datetime, end: datetime) -> timedelta:
    return abs(start - end)


def _latest(processed: list[ProcessedMessage]) -> ProcessedMessage:
    return max(processed, key=lambda p: p.sent_at)


def any_message_gap_rule(gap: timedelta) -> Rule:
    """Keep at least *gap* between any two send times.

    Looks at processed messages sent within ``requested_at ± gap`` and pushes
    the candidate to ``latest sent_at + gap``.  The window guarantees
    ``latest sent_at + gap >= requested_at`` so the absolute difference never
    inflates the delay.
    """

    def not_less_gap_for_any_message(
        results: Sequence[ScheduleEntry],
        messages: Sequence[Message],
        candidate: Message,
    ) -> timedelta:
        _require_arguments(results, messages, candidate)
        lower = candidate.requested_at - gap
        upper = candidate.requested_at + gap
        within = [p for p in processed_messages(results, messages) if lower <= p.sent_at <= upper]
        if not within:
            return _NO_DELAY
        last = _latest(within)
        return _absolute_difference(last.sent_at + gap, candidate.requested_at)

    return not_less_gap_for_any_message


def recipient_gap_rule(gap: timedelta) -> Rule:
    """Keep at least *gap* between messages to the same recipient.

    Only messages sent in ``[requested_at - gap, requested_at]`` count.
    """

    def not_less_gap_for_same_recipient(
        results: Sequence[ScheduleEntry],
        messages: Sequence[Message],
        candidate: Message,
    ) -> timedelta:
        _require_arguments(results, messages, candidate)
        same_recipient = [m for m in messages if m.recipient == candidate.recipient]
        lower = candidate.requested_at - gap
        within = [
            p
            for p in processed_messages(results, same_recipient)
            if lower <= p.sent_at <= candidate.requested_at
        ]
        if not within:
            return _NO_DELAY
        difference = _absolute_difference(candidate.requested_at, _latest(within).sent_at)
        if difference <= gap:
            return gap - difference
        return _NO_DELAY

    return not_less_gap_for_same_recipient


def high_priority_recipient_gap_rule(window: timedelta, priority: int = 1) -> Rule:
    """Keep at least *window* between *priority* messages to the same recipient.

    Messages of any other priority are never delayed by this rule.  Every
    processed message sent at or after ``requested_at - window`` counts,
    including ones sent later than the candidate's requested time.
    """

    def not_less_window_for_same_recipient_and_priority(
        results: Sequence[ScheduleEntry],
        messages: Sequence[Message],
        candidate: Message,
    ) -> timedelta:
        _require_arguments(results, messages, candidate)
        if candidate.priority != priority:
            return _NO_DELAY
        same_class = [
            m for m in messages
            if m.recipient == candidate.recipient and m.priority == priority
        ]
        lower = candidate.requested_at - window
        within = [p for p in processed_messages(results, same_class) if p.sent_at >= lower]
        if not within:
            return _NO_DELAY
        last = _latest(within)
        return _absolute_difference(last.sent_at + window, candidate.requested_at)

    return not_less_window_for_same_recipient_and_priority


def default_rules(settings: AntiFloodSettings | None = None) -> tuple[Rule, ...]:
    """Return the three built-in rules configured from *settings*."""
    settings = settings or AntiFloodSettings()
    return (
        high_priority_recipient_gap_rule(settings.high_priority_window, settings.high_priority),
        recipient_gap_rule(settings.recipient_gap),
        any_message_gap_rule(settings.min_gap),
    )


not_less_24_hours_for_same_recipient_and_priority_1 = high_priority_recipient_gap_rule(
    timedelta(hours=24)
)
not_less_minute_for_same_recipient = recipient_gap_rule(timedelta(minutes=1))
not_less_10_seconds_for_any_message = any_message_gap_rule(timedelta(seconds=10))


__all__ = [
    "Rule",
    "any_message_gap_rule",
    "default_rules",
    "high_priority_recipient_gap_rule",
    "not_less_10_seconds_for_any_message",
    "not_less_24_hours_for_same_recipient_and_priority_1",
    "not_less_minute_for_same_recipient",
    "recipient_gap_rule",
]
