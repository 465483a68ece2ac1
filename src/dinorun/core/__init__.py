"""Core framework components for DINORUN."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType
from .scheduler import FrameScheduler, DeferredHandle

__all__ = [
    "Phase",
    "PhaseMachine",
    "EventBus",
    "Event",
    "EventType",
    "FrameScheduler",
    "DeferredHandle",
]
