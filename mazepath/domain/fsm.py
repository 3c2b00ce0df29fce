"""Finite State Machine for the genetic engine's lifecycle."""

from enum import Enum
from typing import Callable, Dict, Optional, Set


class EngineState(Enum):
    """States of one genetic engine run."""
    INIT = "init"
    EVOLVING = "evolving"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when the engine asks for a transition the machine does not allow."""


class EngineStateMachine:
    """
    Finite State Machine for one genetic engine run.

    State Transitions:
    INIT -> EVOLVING (population seeded)
    INIT -> FAILED (too few valid seed paths)
    EVOLVING -> CONVERGED (best path complete and stagnant long enough)
    EVOLVING -> EXHAUSTED (generation limit reached)

    CONVERGED, EXHAUSTED and FAILED are terminal.
    """

    def __init__(self):
        self._current_state = EngineState.INIT
        self._state_callbacks: Dict[EngineState, Callable[[Optional[dict]], None]] = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> Dict[EngineState, Set[EngineState]]:
        """Build the valid state transition map."""
        return {
            EngineState.INIT: {EngineState.EVOLVING, EngineState.FAILED},
            EngineState.EVOLVING: {EngineState.CONVERGED, EngineState.EXHAUSTED},
            EngineState.CONVERGED: set(),
            EngineState.EXHAUSTED: set(),
            EngineState.FAILED: set(),
        }

    @property
    def current_state(self) -> EngineState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: EngineState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: EngineState, context: Optional[dict] = None):
        """
        Move to the target state and fire its entry callback.

        Args:
            target_state: The state to transition to
            context: Optional context data passed to the entry callback

        Raises:
            InvalidTransitionError: if the transition is not allowed
        """
        if not self.can_transition_to(target_state):
            raise InvalidTransitionError(
                f"Cannot move from {self._current_state.value} to {target_state.value}")

        self._current_state = target_state
        callback = self._state_callbacks.get(target_state)
        if callback is not None:
            callback(context)

    def on_state_enter(self, state: EngineState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            EngineState.INIT: "Seeding population",
            EngineState.EVOLVING: "Evolving population",
            EngineState.CONVERGED: "Converged on a stable best path",
            EngineState.EXHAUSTED: "Generation limit reached",
            EngineState.FAILED: "Could not seed a population",
        }
        return descriptions.get(self._current_state, "Unknown state")
