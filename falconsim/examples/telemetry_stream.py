#!/usr/bin/env python
"""Telemetry stream example.

Runs the simulation and prints comma-delimited telemetry records to stdout
at a fixed polling rate while cycling through simple flight patterns:
straight, roll right, climb, roll left. Pipe the output into any consumer
that understands the record format (see falconsim.telemetry).

Usage:
    python telemetry_stream.py [duration_s] [rate_hz]
"""

import logging
import sys
import time

from falconsim import AircraftState, Simulation, clamp_update_rate
from falconsim.telemetry import TelemetryFrame

PATTERNS = (
    ("straight", (0.0, 0.0, 0.0)),
    ("roll right", (0.2, 0.0, 0.0)),
    ("climb", (0.0, 0.2, 0.0)),
    ("roll left", (-0.2, 0.0, 0.0)),
)
PATTERN_PERIOD = 1.0  # [s]

logger = logging.getLogger("telemetry_stream")


def main() -> None:
    """Run the telemetry stream example."""
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    duration = float(sys.argv[1]) if len(sys.argv) > 1 else 4.0
    rate = clamp_update_rate(float(sys.argv[2]) if len(sys.argv) > 2 else 20.0)

    print(",".join(TelemetryFrame._fields))

    with Simulation(timestep=0.01) as sim:
        sim.set_state(AircraftState.at_altitude(100.0))
        sim.set_thrust(0.8)

        start = time.monotonic()
        current = None
        while (elapsed := time.monotonic() - start) < duration:
            name, surfaces = PATTERNS[int(elapsed / PATTERN_PERIOD) % len(PATTERNS)]
            if name != current:
                logger.info("Flight pattern: %s", name)
                sim.set_control_surfaces(*surfaces)
                current = name

            print(sim.get_telemetry().to_record())
            time.sleep(1.0 / rate)


if __name__ == "__main__":
    main()
