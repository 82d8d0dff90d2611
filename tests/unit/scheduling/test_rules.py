"""Unit tests for the built-in anti-flood rules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from antiflood.config import AntiFloodSettings
from antiflood.kernel.errors import InvalidArgumentError
from antiflood.scheduling import Message, ScheduleEntry
from antiflood.scheduling.rules import (
    any_message_gap_rule,
    default_rules,
    high_priority_recipient_gap_rule,
    not_less_10_seconds_for_any_message,
    not_less_24_hours_for_same_recipient_and_priority_1,
    not_less_minute_for_same_recipient,
    recipient_gap_rule,
)

T = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _msg(id: str, at: datetime, recipient: str = "+5511900000001", priority: int = 0) -> Message:  # noqa: A002
    return Message(id=id, recipient=recipient, priority=priority, requested_at=at)


def _sent(message: Message, at: datetime | None = None) -> ScheduleEntry:
    return ScheduleEntry(message_id=message.id, sent_at=at or message.requested_at)


# ---------------------------------------------------------------------------
# Minimum gap between any two messages
# ---------------------------------------------------------------------------


class TestAnyMessageGap:
    rule = staticmethod(not_less_10_seconds_for_any_message)

    def test_no_processed_messages_means_no_delay(self) -> None:
        candidate = _msg("b", T)
        assert self.rule([], [candidate], candidate) == timedelta(0)

    def test_pushes_to_full_gap_after_previous(self) -> None:
        a = _msg("a", T, recipient="+1")
        b = _msg("b", T + timedelta(seconds=3), recipient="+2")
        assert self.rule([_sent(a)], [a, b], b) == timedelta(seconds=7)

    def test_exact_gap_boundary_needs_no_delay(self) -> None:
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=10))
        assert self.rule([_sent(a)], [a, b], b) == timedelta(0)

    def test_outside_window_is_ignored(self) -> None:
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=11))
        assert self.rule([_sent(a)], [a, b], b) == timedelta(0)

    def test_message_sent_after_requested_time_counts(self) -> None:
        a = _msg("a", T + timedelta(seconds=5))
        b = _msg("b", T)
        assert self.rule([_sent(a)], [a, b], b) == timedelta(seconds=15)

    def test_upper_window_bound_is_inclusive(self) -> None:
        a = _msg("a", T + timedelta(seconds=10))
        b = _msg("b", T)
        assert self.rule([_sent(a)], [a, b], b) == timedelta(seconds=20)

    def test_latest_send_in_window_wins(self) -> None:
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=4))
        c = _msg("c", T + timedelta(seconds=6))
        assert self.rule([_sent(a), _sent(b)], [a, b, c], c) == timedelta(seconds=8)

    def test_uses_computed_send_time_not_requested_time(self) -> None:
        a = _msg("a", T - timedelta(minutes=5))
        b = _msg("b", T)
        assert self.rule([_sent(a, T - timedelta(seconds=2))], [a, b], b) == timedelta(seconds=8)

    def test_unprocessed_messages_are_invisible(self) -> None:
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=1))
        assert self.rule([], [a, b], b) == timedelta(0)

    def test_entries_without_registered_message_are_ignored(self) -> None:
        b = _msg("b", T)
        ghost = ScheduleEntry(message_id="ghost", sent_at=T)
        assert self.rule([ghost], [b], b) == timedelta(0)

    def test_custom_gap(self) -> None:
        rule = any_message_gap_rule(timedelta(seconds=30))
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=10))
        assert rule([_sent(a)], [a, b], b) == timedelta(seconds=20)


# ---------------------------------------------------------------------------
# Minimum gap per recipient
# ---------------------------------------------------------------------------


class TestRecipientGap:
    rule = staticmethod(not_less_minute_for_same_recipient)

    def test_extends_gap_to_a_full_minute(self) -> None:
        c = _msg("c", T, recipient="X")
        d = _msg("d", T + timedelta(seconds=30), recipient="X")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(seconds=30)

    def test_other_recipients_are_ignored(self) -> None:
        c = _msg("c", T, recipient="X")
        d = _msg("d", T + timedelta(seconds=30), recipient="Y")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(0)

    def test_send_at_same_instant_needs_full_gap(self) -> None:
        c = _msg("c", T, recipient="X")
        d = _msg("d", T, recipient="X")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(minutes=1)

    def test_lower_window_bound_needs_no_delay(self) -> None:
        c = _msg("c", T, recipient="X")
        d = _msg("d", T + timedelta(minutes=1), recipient="X")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(0)

    def test_older_sends_are_ignored(self) -> None:
        c = _msg("c", T, recipient="X")
        d = _msg("d", T + timedelta(seconds=61), recipient="X")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(0)

    def test_sends_after_requested_time_are_ignored(self) -> None:
        c = _msg("c", T + timedelta(seconds=10), recipient="X")
        d = _msg("d", T, recipient="X")
        assert self.rule([_sent(c)], [c, d], d) == timedelta(0)

    def test_latest_send_for_recipient_wins(self) -> None:
        a = _msg("a", T, recipient="X")
        b = _msg("b", T + timedelta(seconds=20), recipient="X")
        c = _msg("c", T + timedelta(seconds=30), recipient="X")
        assert self.rule([_sent(a), _sent(b)], [a, b, c], c) == timedelta(seconds=50)

    def test_custom_gap(self) -> None:
        rule = recipient_gap_rule(timedelta(minutes=5))
        c = _msg("c", T, recipient="X")
        d = _msg("d", T + timedelta(minutes=1), recipient="X")
        assert rule([_sent(c)], [c, d], d) == timedelta(minutes=4)


# ---------------------------------------------------------------------------
# Daily gap per recipient for priority-1 messages
# ---------------------------------------------------------------------------


class TestHighPriorityRecipientGap:
    rule = staticmethod(not_less_24_hours_for_same_recipient_and_priority_1)

    def test_daily_floor_for_priority_one(self) -> None:
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=1), recipient="X", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(hours=23)

    def test_other_priorities_are_never_delayed(self) -> None:
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=1), recipient="X", priority=0)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(0)

    def test_previous_non_priority_messages_are_ignored(self) -> None:
        e = _msg("e", T, recipient="X", priority=2)
        f = _msg("f", T + timedelta(hours=1), recipient="X", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(0)

    def test_other_recipients_are_ignored(self) -> None:
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=1), recipient="Y", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(0)

    def test_window_boundary_needs_no_delay(self) -> None:
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=24), recipient="X", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(0)

    def test_older_sends_are_ignored(self) -> None:
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=25), recipient="X", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(0)

    def test_window_has_no_upper_bound(self) -> None:
        e = _msg("e", T + timedelta(hours=2), recipient="X", priority=1)
        f = _msg("f", T, recipient="X", priority=1)
        assert self.rule([_sent(e)], [e, f], f) == timedelta(hours=26)

    def test_custom_priority_class(self) -> None:
        rule = high_priority_recipient_gap_rule(timedelta(hours=1), priority=5)
        e = _msg("e", T, recipient="X", priority=5)
        f = _msg("f", T + timedelta(minutes=15), recipient="X", priority=5)
        assert rule([_sent(e)], [e, f], f) == timedelta(minutes=45)


# ---------------------------------------------------------------------------
# Absolute difference vs. clamping at zero
# ---------------------------------------------------------------------------


class TestAbsoluteDifferenceMatchesClamp:
    """The window filters keep ``last + gap - requested`` non-negative, so the
    absolute difference is the same as clamping at zero."""

    @pytest.mark.parametrize("offset_seconds", [-15, -10, -3, 0, 3, 9, 10, 11, 30])
    def test_any_message_rule(self, offset_seconds: int) -> None:
        gap = timedelta(seconds=10)
        a = _msg("a", T)
        b = _msg("b", T + timedelta(seconds=offset_seconds))
        expected = max(T + gap - b.requested_at, timedelta(0)) if abs(offset_seconds) <= 10 else timedelta(0)
        assert not_less_10_seconds_for_any_message([_sent(a)], [a, b], b) == expected

    @pytest.mark.parametrize("offset_hours", [-30, -24, -1, 0, 1, 23, 24, 25])
    def test_high_priority_rule(self, offset_hours: int) -> None:
        window = timedelta(hours=24)
        e = _msg("e", T, recipient="X", priority=1)
        f = _msg("f", T + timedelta(hours=offset_hours), recipient="X", priority=1)
        expected = max(T + window - f.requested_at, timedelta(0)) if offset_hours <= 24 else timedelta(0)
        assert not_less_24_hours_for_same_recipient_and_priority_1([_sent(e)], [e, f], f) == expected


# ---------------------------------------------------------------------------
# Argument contract
# ---------------------------------------------------------------------------


ALL_RULES = [
    not_less_10_seconds_for_any_message,
    not_less_minute_for_same_recipient,
    not_less_24_hours_for_same_recipient_and_priority_1,
]


class TestArgumentContract:
    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_missing_candidate_raises(self, rule) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(InvalidArgumentError) as exc_info:
            rule([], [], None)
        assert exc_info.value.argument == "candidate"

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_missing_results_raises(self, rule) -> None:  # type: ignore[no-untyped-def]
        m = _msg("a", T, priority=1)
        with pytest.raises(InvalidArgumentError) as exc_info:
            rule(None, [m], m)
        assert exc_info.value.argument == "results"

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_missing_messages_raises(self, rule) -> None:  # type: ignore[no-untyped-def]
        m = _msg("a", T, priority=1)
        with pytest.raises(InvalidArgumentError) as exc_info:
            rule([], None, m)
        assert exc_info.value.argument == "messages"

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            not_less_10_seconds_for_any_message([], [], None)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# default_rules
# ---------------------------------------------------------------------------


class TestDefaultRules:
    def test_three_rules(self) -> None:
        assert len(default_rules()) == 3

    def test_uses_settings(self) -> None:
        rules = default_rules(AntiFloodSettings(min_gap_seconds=0, recipient_gap_seconds=0))
        a = _msg("a", T, recipient="X")
        b = _msg("b", T, recipient="X")
        assert [rule([_sent(a)], [a, b], b) for rule in rules] == [timedelta(0)] * 3
