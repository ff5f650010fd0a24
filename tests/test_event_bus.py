"""Tests for the EventBus domain event dispatch system."""

from huntsim.events import AgentDespawnedEvent, EventBus, SimulationStateChangedEvent
from huntsim.species import Species


def despawned(agent_id=1):
    return AgentDespawnedEvent(agent_id=agent_id, species=Species.PREY, fitness=0.0, reason="consumed")


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(AgentDespawnedEvent, received.append)

        event = despawned(42)
        bus.emit(event)

        assert received == [event]
        assert received[0] is event

    def test_no_subscribers_no_crash(self) -> None:
        bus = EventBus()
        bus.emit(despawned())
        assert not bus.has_subscribers(AgentDespawnedEvent)

    def test_handlers_run_in_registration_order(self) -> None:
        bus = EventBus()
        calls: list = []
        bus.subscribe(AgentDespawnedEvent, lambda e: calls.append("first"))
        bus.subscribe(AgentDespawnedEvent, lambda e: calls.append("second"))

        bus.emit(despawned())

        assert calls == ["first", "second"]

    def test_dispatch_is_by_exact_type(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(SimulationStateChangedEvent, received.append)

        bus.emit(despawned())

        assert received == []

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(AgentDespawnedEvent, received.append)

        assert bus.unsubscribe(AgentDespawnedEvent, received.append) is True
        assert bus.unsubscribe(AgentDespawnedEvent, received.append) is False
        bus.emit(despawned())
        assert received == []

    def test_handler_may_unsubscribe_during_emit(self) -> None:
        bus = EventBus()
        calls: list = []

        def once(event) -> None:
            calls.append(event.agent_id)
            bus.unsubscribe(AgentDespawnedEvent, once)

        bus.subscribe(AgentDespawnedEvent, once)
        bus.emit(despawned(1))
        bus.emit(despawned(2))

        assert calls == [1]

    def test_clear_subscribers(self) -> None:
        bus = EventBus()
        bus.subscribe(AgentDespawnedEvent, lambda e: None)
        bus.clear_subscribers()
        assert not bus.has_subscribers(AgentDespawnedEvent)
