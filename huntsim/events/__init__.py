"""Events module for simulation notifications.

This module provides the EventBus for decoupling the generation loop from
observers, plus typed domain event definitions.
"""

from huntsim.events.domain_events import (
    AgentDespawnedEvent,
    GenerationCompletedEvent,
    InteractionAppliedEvent,
    SimulationStateChangedEvent,
)
from huntsim.events.event_bus import EventBus

__all__ = [
    "AgentDespawnedEvent",
    "EventBus",
    "GenerationCompletedEvent",
    "InteractionAppliedEvent",
    "SimulationStateChangedEvent",
]
