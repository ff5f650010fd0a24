"""State machine for the generation scheduler.

All valid states are enumerated and the valid transitions are listed
explicitly, so a control-surface call that makes no sense in the current
state is caught before it touches any population.

    IDLE -> SEEDING -> RUNNING -> RANKING -> SELECTING -> BREEDING -> RUNNING
                          |  ^
                          v  |
                        STOPPED --(advance)--> RANKING
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Dict, FrozenSet, Generic, Iterable, List, Mapping, TypeVar

from huntsim.exceptions import InvalidStateError

S = TypeVar("S", bound=Enum)


@dataclass(frozen=True)
class StateTransition(Generic[S]):
    """One recorded move of a state machine.

    Attributes:
        from_state: State that was left
        to_state: State that was entered
        generation: Generation counter at the time of the move
        reason: What triggered it ("timer", "stop", ...)
    """

    from_state: S
    to_state: S
    generation: int
    reason: str = ""


class StateMachine(Generic[S]):
    """Finite state machine over an Enum with an explicit transition table.

    Args:
        initial_state: Starting state; must be a key of ``valid_transitions``
        valid_transitions: Allowed target states for each state
        track_history: Keep the most recent transitions for inspection
        max_history: How many transitions to keep when tracking
    """

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Mapping[S, Iterable[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        table: Dict[S, FrozenSet[S]] = {
            state: frozenset(targets) for state, targets in valid_transitions.items()
        }
        if initial_state not in table:
            raise ValueError(
                f"{initial_state.name} has no entry in the transition table "
                f"(states: {', '.join(s.name for s in table)})"
            )
        self._state = initial_state
        self._table = table
        self._history: Deque[StateTransition[S]] = deque(maxlen=max_history)
        self._track_history = track_history

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Recorded transitions, oldest first; empty unless tracking is on."""
        return list(self._history)

    def allowed_targets(self) -> FrozenSet[S]:
        return self._table.get(self._state, frozenset())

    def can_transition(self, target: S) -> bool:
        return target in self.allowed_targets()

    def try_transition(self, target: S, generation: int = 0, reason: str = "") -> bool:
        """Move to ``target`` if allowed; report success instead of raising."""
        if not self.can_transition(target):
            return False
        previous, self._state = self._state, target
        if self._track_history:
            self._history.append(StateTransition(previous, target, generation, reason))
        return True

    def transition(self, target: S, generation: int = 0, reason: str = "") -> S:
        """Move to ``target``.

        Raises:
            InvalidStateError: If ``target`` is not reachable from the current state;
                the state is left unchanged
        """
        if self.try_transition(target, generation, reason):
            return target
        allowed = sorted(s.name for s in self.allowed_targets())
        raise InvalidStateError(
            f"Invalid transition: {self._state.name} -> {target.name} "
            f"(allowed: {', '.join(allowed) or 'none'})"
        )

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"


class SimulationState(Enum):
    """Phases of the generational loop."""

    IDLE = auto()  # Nothing spawned yet
    SEEDING = auto()  # Spawning the first cohort
    RUNNING = auto()  # Agents tick, the generation timer runs
    RANKING = auto()  # Pruning despawned agents, guarding empty populations
    SELECTING = auto()  # Truncation selection and winner persistence
    BREEDING = auto()  # Spawning the next cohort
    STOPPED = auto()  # Suspended; membership kept


SIMULATION_TRANSITIONS: Dict[SimulationState, List[SimulationState]] = {
    SimulationState.IDLE: [SimulationState.SEEDING],
    SimulationState.SEEDING: [SimulationState.RUNNING],
    SimulationState.RUNNING: [SimulationState.RANKING, SimulationState.STOPPED],
    SimulationState.RANKING: [SimulationState.SELECTING],
    SimulationState.SELECTING: [SimulationState.BREEDING],
    SimulationState.BREEDING: [SimulationState.RUNNING],
    SimulationState.STOPPED: [SimulationState.RUNNING, SimulationState.RANKING],
}

# Generation-transition phases: no agent may tick and nothing outside the
# scheduler may change population membership while one is in progress.
TRANSITION_STATES = frozenset(
    {
        SimulationState.SEEDING,
        SimulationState.RANKING,
        SimulationState.SELECTING,
        SimulationState.BREEDING,
    }
)


def create_simulation_state_machine(track_history: bool = True) -> StateMachine[SimulationState]:
    """State machine for the generation scheduler, starting in IDLE."""
    return StateMachine(SimulationState.IDLE, SIMULATION_TRANSITIONS, track_history=track_history)
