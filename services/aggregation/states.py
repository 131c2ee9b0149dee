"""
Event aggregation states.

Explicit state enumeration for the per-event aggregation cycle.
"""

from enum import Enum, auto


class EventState(Enum):
    """
    States of one event's aggregation cycle.

    An event is reset, populated by the reducers, then emitted. The next
    event starts again from RESET.
    """

    # Before the first event
    IDLE = auto()

    # Per-event fields zeroed, event_id assigned
    RESET = auto()

    # Reducers have written their outputs
    POPULATED = auto()

    # Output record handed out
    EMITTED = auto()

    def __str__(self) -> str:
        """String representation of state."""
        return self.name


VALID_TRANSITIONS = {
    EventState.IDLE: {EventState.RESET},
    EventState.RESET: {EventState.POPULATED},
    EventState.POPULATED: {EventState.EMITTED},
    EventState.EMITTED: {EventState.RESET},
}


def is_valid_transition(from_state: EventState, to_state: EventState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is valid
    """
    return to_state in VALID_TRANSITIONS.get(from_state, set())
