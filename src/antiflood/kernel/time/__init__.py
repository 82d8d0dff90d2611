"""Kernel time – Clock port + implementations."""
from antiflood.kernel.time.clock import Clock, FrozenClock, utc_now

__all__ = ["Clock", "FrozenClock", "utc_now"]
