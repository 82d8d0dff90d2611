"""Scheduling models – messages, schedule entries and the processed-message join."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any
from uuid import uuid4

from antiflood.kernel.errors import ValidationError
from antiflood.kernel.time import Clock, utc_now

type MessageId = str


@dataclasses.dataclass(frozen=True, kw_only=True)
class Message:
    """A pending outbound message.

    ``priority == 1`` marks the high-priority class that the daily
    per-recipient rule applies to.

    Example::

        msg = Message(
            recipient="+5511999990000",
            priority=1,
            requested_at=datetime(2026, 1, 1, 9, 0, tzinfo=UTC),
        )
    """

    id: MessageId = dataclasses.field(default_factory=lambda: str(uuid4()))
    recipient: str
    priority: int = 0
    requested_at: datetime = dataclasses.field(default_factory=utc_now)

    def __post_init__(self) -> None:
        errors: list[dict[str, Any]] = []
        if not isinstance(self.id, str) or not self.id:
            errors.append({"field": "id", "error": "must be a non-empty string"})
        if not isinstance(self.recipient, str) or not self.recipient:
            errors.append({"field": "recipient", "error": "must be a non-empty string"})
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            errors.append({"field": "priority", "error": "must be an integer"})
        if not isinstance(self.requested_at, datetime):
            errors.append({"field": "requested_at", "error": "must be a datetime"})
        elif self.requested_at.tzinfo is None or self.requested_at.utcoffset() is None:
            errors.append({"field": "requested_at", "error": "must be timezone-aware"})
        if errors:
            raise ValidationError(f"Invalid message {self.id!r}", errors=errors)

    @classmethod
    def create(
        cls,
        recipient: str,
        *,
        priority: int = 0,
        clock: Clock | None = None,
        id: MessageId | None = None,  # noqa: A002
    ) -> "Message":
        """Build a message requested for *now* according to *clock*."""
        requested_at = clock.now() if clock is not None else utc_now()
        if id is None:
            return cls(recipient=recipient, priority=priority, requested_at=requested_at)
        return cls(id=id, recipient=recipient, priority=priority, requested_at=requested_at)


@dataclasses.dataclass(frozen=True)
class ScheduleEntry:
    """The computed send time of one message."""

    message_id: MessageId
    sent_at: datetime


@dataclasses.dataclass(frozen=True)
class ProcessedMessage:
    """A registered message joined with the send time already computed for it."""

    message: Message
    sent_at: datetime

    @property
    def id(self) -> MessageId:
        return self.message.id

    @property
    def recipient(self) -> str:
        return self.message.recipient

    @property
    def priority(self) -> int:
        return self.message.priority

    @property
    def requested_at(self) -> datetime:
        return self.message.requested_at


class ScheduleResults(tuple[ScheduleEntry, ...]):
    """Entries computed so far in one retrieval, in processing order.

    ``sent_at_by_id`` is a read-only id -> ``sent_at`` index.  The scheduler
    shares one index across every rule call of a retrieval; it is only
    guaranteed to match the tuple while the rule call that received it runs.
    """

    sent_at_by_id: Mapping[MessageId, datetime]

    def __new__(
        cls,
        entries: Iterable[ScheduleEntry] = (),
        sent_at_by_id: dict[MessageId, datetime] | None = None,
    ) -> "ScheduleResults":
        self = super().__new__(cls, entries)
        if sent_at_by_id is None:
            sent_at_by_id = {entry.message_id: entry.sent_at for entry in self}
        self.sent_at_by_id = MappingProxyType(sent_at_by_id)
        return self


def processed_messages(
    results: Iterable[ScheduleEntry],
    messages: Iterable[Message],
) -> list[ProcessedMessage]:
    """Join *messages* with *results* on message id.

    Only messages that already have an entry are returned, in the order of
    *messages*.  A :class:`ScheduleResults` reuses its index instead of
    rebuilding one.
    """
    if isinstance(results, ScheduleResults):
        sent_at_by_id = results.sent_at_by_id
    else:
        sent_at_by_id = {entry.message_id: entry.sent_at for entry in results}
    return [
        ProcessedMessage(message=m, sent_at=sent_at_by_id[m.id])
        for m in messages
        if m.id in sent_at_by_id
    ]


__all__ = [
    "Message",
    "MessageId",
    "ProcessedMessage",
    "ScheduleEntry",
    "ScheduleResults",
    "processed_messages",
]
