#parking_simulator\core\state_machine.py

from parking_simulator.core.errors import InvalidVehicleTransition
from parking_simulator.core.models import VehicleState


ALLOWED_TRANSITIONS = {
    VehicleState.ARRIVING: {
        VehicleState.PARKED,
        VehicleState.WAITING,
        VehicleState.DROPPED,
    },
    VehicleState.WAITING: {
        VehicleState.PARKED,
        # re-admission lost the released permit to a fresh arrival
        VehicleState.WAITING,
        VehicleState.DROPPED,
    },
    VehicleState.PARKED: {
        VehicleState.DEPARTED,
    },
}

TERMINAL_STATES = frozenset({VehicleState.DROPPED, VehicleState.DEPARTED})


class VehicleStateMachine:
    @staticmethod
    def can_transition(current: VehicleState, new_state: VehicleState) -> bool:
        return new_state in ALLOWED_TRANSITIONS.get(current, set())

    @staticmethod
    def transition(current: VehicleState, new_state: VehicleState) -> VehicleState:
        if not VehicleStateMachine.can_transition(current, new_state):
            raise InvalidVehicleTransition(
                f"Cannot transition from {current.value} to {new_state.value}"
            )
        return new_state

    @staticmethod
    def is_terminal(state: VehicleState) -> bool:
        return state in TERMINAL_STATES
