"""Testing – Hypothesis strategies for antiflood users."""
from antiflood.testing.strategies import message_batch_strategy, message_strategy

__all__ = ["message_batch_strategy", "message_strategy"]
