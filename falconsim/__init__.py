"""FalconSim - Real-time flight dynamics for small fixed-wing UAVs.

This package provides a first-order 6DOF flight dynamics model and a
thread-safe real-time driver that runs it in the background while other
threads (displays, telemetry links, input devices) read state and write
controls.

Example:
    >>> import numpy as np
    >>> from falconsim import AircraftState, Simulation
    >>>
    >>> with Simulation(timestep=0.01) as sim:
    ...     sim.set_state(AircraftState.at_altitude(100.0))
    ...     sim.set_thrust(0.8)
    ...     sim.set_control_surfaces(0.3, 0.0, 0.0)
    ...     print(sim.get_state().altitude)
"""

import logging

__version__ = "0.1.0"

from falconsim.dynamics import (
    AircraftState,
    ControlInputs,
    DynamicsConfig,
    FlightDynamics,
)
from falconsim.environment import Atmosphere
from falconsim.simulation import SimConfig, Simulation, SimulationStatus
from falconsim.telemetry import TelemetryFrame, clamp_update_rate
from falconsim.vehicle import UAVPhysicalProperties

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Dynamics
    "AircraftState",
    "ControlInputs",
    "DynamicsConfig",
    "FlightDynamics",
    # Vehicle and environment
    "UAVPhysicalProperties",
    "Atmosphere",
    # Simulation
    "SimConfig",
    "Simulation",
    "SimulationStatus",
    # Telemetry
    "TelemetryFrame",
    "clamp_update_rate",
]
