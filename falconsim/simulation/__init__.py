"""Simulation module for real-time UAV flight simulation.

Provides the threaded driver that advances a flight dynamics model at a
wall-clock-paced cadence while other threads read state and write controls.

Example:
    >>> from falconsim.simulation import Simulation
    >>>
    >>> sim = Simulation(timestep=0.01)
    >>> sim.start()
    >>> sim.set_thrust(0.8)
    >>> state = sim.get_state()
    >>> sim.stop()
"""

from falconsim.simulation.simulator import (
    SimConfig,
    Simulation,
    SimulationStatus,
)

__all__ = [
    "SimConfig",
    "Simulation",
    "SimulationStatus",
]
