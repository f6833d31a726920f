#!/usr/bin/env python
"""Basic real-time simulation example.

Starts a UAV at 100 m, then flies a short control schedule while sampling
the state from the main thread:
1. Accelerate at 80% throttle
2. Roll right with aileron
3. Level the ailerons and pitch up
4. Return to neutral controls
"""

import logging
import time

import numpy as np

from falconsim import AircraftState, Simulation

SAMPLE_PERIOD = 0.1  # [s]


def print_state(state: AircraftState) -> None:
    """Print one state line."""
    n, e, d = state.position
    u, v, w = state.velocity
    roll, pitch, yaw = state.orientation_deg
    print(
        f"Position: ({n:8.2f}, {e:8.2f}, {d:8.2f}) m  "
        f"Velocity: ({u:6.2f}, {v:6.2f}, {w:6.2f}) m/s  "
        f"Euler: ({roll:7.2f}, {pitch:7.2f}, {yaw:7.2f}) deg"
    )


def fly(sim: Simulation, duration: float) -> None:
    """Sample the running simulation for ``duration`` seconds."""
    for _ in range(int(duration / SAMPLE_PERIOD)):
        time.sleep(SAMPLE_PERIOD)
        print_state(sim.get_state())


def main() -> None:
    """Run the basic simulation example."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("FALCONSIM - BASIC SIMULATION")
    print("=" * 60)

    # 100 Hz loop
    sim = Simulation(timestep=0.01)
    sim.set_state(AircraftState(position=np.array([0.0, 0.0, -100.0])))

    sim.start()
    try:
        print("\nInitial state:")
        print_state(sim.get_state())

        print("\nApplying 80% throttle...")
        sim.set_thrust(0.8)
        fly(sim, 2.0)

        print("\nApplying right aileron (roll right)...")
        sim.set_control_surfaces(0.3, 0.0, 0.0)
        fly(sim, 1.0)

        print("\nLeveling out and climbing...")
        sim.set_control_surfaces(0.0, 0.1, 0.0)
        fly(sim, 1.0)

        print("\nNeutral controls...")
        sim.set_control_surfaces(0.0, 0.0, 0.0)
        fly(sim, 1.0)
    finally:
        sim.stop()

    print(f"\nSimulation stopped after {sim.step_count} steps.")


if __name__ == "__main__":
    main()
