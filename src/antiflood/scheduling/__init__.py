"""Scheduling – messages, rules, registry and the anti-flood engine."""
from antiflood.scheduling.models import (
    Message,
    MessageId,
    ProcessedMessage,
    ScheduleEntry,
    ScheduleResults,
    processed_messages,
)
from antiflood.scheduling.registry import RuleRegistry
from antiflood.scheduling.rules import (
    Rule,
    any_message_gap_rule,
    default_rules,
    high_priority_recipient_gap_rule,
    recipient_gap_rule,
)
from antiflood.scheduling.scheduler import AntiFloodScheduler

__all__ = [
    "AntiFloodScheduler",
    "Message",
    "MessageId",
    "ProcessedMessage",
    "Rule",
    "RuleRegistry",
    "ScheduleEntry",
    "ScheduleResults",
    "any_message_gap_rule",
    "default_rules",
    "high_priority_recipient_gap_rule",
    "processed_messages",
    "recipient_gap_rule",
]
