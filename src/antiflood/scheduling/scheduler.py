"""Scheduling – the anti-flood send-time engine.

The scheduler is synchronous and keeps all of its state on the instance.
It is not thread-safe: callers sharing one instance across threads must
serialise ``push_message`` / ``get_schedule`` themselves.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from antiflood.config.settings import AntiFloodSettings
from antiflood.kernel.errors import AntiFloodError, ConflictError, InvalidArgumentError
from antiflood.observability.logging import get_logger
from antiflood.scheduling.models import Message, ScheduleEntry, ScheduleResults
from antiflood.scheduling.registry import RuleRegistry, rule_name
from antiflood.scheduling.rules import Rule

logger = get_logger(__name__)


class AntiFloodScheduler:
    """Assign a send time to every pushed message.

    Messages are replayed in push order on every :meth:`get_schedule`
    call.  Each message is delayed by the largest delay any registered rule
    asks for; earlier entries are never revised.

    Example::

        scheduler = AntiFloodScheduler()
        scheduler.push_message(Message(id="a", recipient="+551100", requested_at=t0))
        scheduler.push_message(Message(id="b", recipient="+551101", requested_at=t0))
        [e.sent_at for e in scheduler.get_schedule()]   # [t0, t0 + 10s]
    """

    def __init__(self, settings: AntiFloodSettings | None = None) -> None:
        self._settings = settings or AntiFloodSettings()
        self._rules = RuleRegistry.with_defaults(self._settings)
        self._messages: list[Message] = []
        self._message_ids: set[str] = set()
        self._results: list[ScheduleEntry] = []

    @property
    def settings(self) -> AntiFloodSettings:
        return self._settings

    @property
    def rules(self) -> RuleRegistry:
        return self._rules

    @property
    def messages(self) -> tuple[Message, ...]:
        """Registered messages in push order."""
        return tuple(self._messages)

    @property
    def last_result(self) -> tuple[ScheduleEntry, ...]:
        """Entries of the latest :meth:`get_schedule` call, in push order."""
        return tuple(self._results)

    def __len__(self) -> int:
        return len(self._messages)

    def push_message(self, message: Message) -> None:
        """Register *message*; no schedule is computed until :meth:`get_schedule`."""
        if not isinstance(message, Message):
            raise InvalidArgumentError(
                f"expected Message, got {type(message).__name__}", argument="message"
            )
        if message.id in self._message_ids:
            raise ConflictError(
                f"Message '{message.id}' is already registered",
                detail={"message_id": message.id},
            )
        self._messages.append(message)
        self._message_ids.add(message.id)
        logger.debug("message_pushed", message_id=message.id, queued=len(self._messages))

    def add_rule(self, rule: Rule) -> None:
        """Append a custom rule; it applies to every later retrieval."""
        self._rules.add(rule)
        logger.debug("rule_added", rule=rule_name(rule), rules=len(self._rules))

    def get_schedule(self) -> list[ScheduleEntry]:
        """Compute send times for all registered messages, sorted by ``sent_at``."""
        results: list[ScheduleEntry] = []
        messages = tuple(self._messages)
        rules = tuple(self._rules)
        sent_at_by_id: dict[str, datetime] = {}

        try:
            for message in messages:
                snapshot = ScheduleResults(results, sent_at_by_id)
                delay = self._delay_for(rules, snapshot, messages, message)
                if delay:
                    logger.debug(
                        "message_delayed",
                        message_id=message.id,
                        delay_seconds=delay.total_seconds(),
                    )
                entry = ScheduleEntry(message_id=message.id, sent_at=self._sent_at(message, delay))
                results.append(entry)
                sent_at_by_id[entry.message_id] = entry.sent_at
        except AntiFloodError as exc:
            logger.error("schedule_failed", error=exc.to_dict())
            raise

        self._results = results
        logger.info("schedule_computed", messages=len(messages), rules=len(rules))
        return sorted(results, key=lambda e: e.sent_at)

    @staticmethod
    def _delay_for(
        rules: tuple[Rule, ...],
        results: ScheduleResults,
        messages: tuple[Message, ...],
        message: Message,
    ) -> timedelta:
        delay = timedelta(0)
        for rule in rules:
            required = rule(results, messages, message)
            if not isinstance(required, timedelta) or required < timedelta(0):
                raise InvalidArgumentError(
                    f"rule {rule_name(rule)} returned {required!r}; expected a non-negative timedelta",
                    argument="rule",
                    detail={"message_id": message.id},
                )
            delay = max(delay, required)
        return delay

    @staticmethod
    def _sent_at(message: Message, delay: timedelta) -> datetime:
        try:
            return message.requested_at + delay
        except OverflowError as exc:
            raise InvalidArgumentError(
                f"delay of {delay} pushes message {message.id!r} out of the datetime range",
                argument="rule",
                detail={"message_id": message.id},
            ) from exc


__all__ = ["AntiFloodScheduler"]
