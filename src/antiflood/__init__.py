"""
antiflood – anti-flood send-time scheduler.

Import path convention::

    from antiflood import AntiFloodScheduler, Message
    from antiflood.scheduling.rules import recipient_gap_rule
    from antiflood.kernel.errors import InvalidArgumentError
"""

from antiflood.scheduling import (
    AntiFloodScheduler,
    Message,
    ProcessedMessage,
    Rule,
    RuleRegistry,
    ScheduleEntry,
    ScheduleResults,
    processed_messages,
)

__version__ = "0.1.0"
__all__ = [
    "AntiFloodScheduler",
    "Message",
    "ProcessedMessage",
    "Rule",
    "RuleRegistry",
    "ScheduleEntry",
    "ScheduleResults",
    "__version__",
    "processed_messages",
]
