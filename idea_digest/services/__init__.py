"""Digest engine services."""

from idea_digest.services.cycle_scheduler import CycleScheduler, SchedulerState
from idea_digest.services.delivery_dispatcher import DeliveryDispatcher
from idea_digest.services.digest_compiler import DigestCompiler
from idea_digest.services.window import compute_window, due_cadences, is_due

__all__ = [
    "CycleScheduler",
    "DeliveryDispatcher",
    "DigestCompiler",
    "SchedulerState",
    "compute_window",
    "due_cadences",
    "is_due",
]
