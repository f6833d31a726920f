"""Dynamics module for 6DOF UAV flight simulation.

This module provides the aircraft state representation, Euler-angle
kinematics and the flight dynamics model that integrates them.

Example:
    >>> from falconsim.dynamics import AircraftState, ControlInputs, FlightDynamics
    >>> import numpy as np
    >>>
    >>> model = FlightDynamics()
    >>> model.set_state(AircraftState.at_altitude(100.0, airspeed=12.0))
    >>> model.set_controls(ControlInputs(throttle=0.8))
    >>> model.update(0.01)
"""

from falconsim.dynamics.flight_dynamics import (
    GRAVITY,
    MIN_AIRSPEED,
    DynamicsConfig,
    FlightDynamics,
)
from falconsim.dynamics.kinematics import (
    dcm_body_to_ned,
    dcm_ned_to_body,
    euler_rate_matrix,
    euler_rates,
)
from falconsim.dynamics.state import (
    STATE_SIZE,
    AircraftState,
    ControlInputs,
    clamp,
)

__all__ = [
    # State
    "AircraftState",
    "ControlInputs",
    "STATE_SIZE",
    "clamp",
    # Kinematics
    "dcm_body_to_ned",
    "dcm_ned_to_body",
    "euler_rate_matrix",
    "euler_rates",
    # Flight dynamics
    "FlightDynamics",
    "DynamicsConfig",
    "GRAVITY",
    "MIN_AIRSPEED",
]
