"""Telemetry snapshot records.

A telemetry frame is the 14-field record that display and network
collaborators poll from a running simulation: a timestamp, the 12 kinematic
state fields a ground station shows (NED position, body velocity, Euler
angles) and the 4 control inputs.

On the wire a frame is one comma-delimited line with six decimal places, in
field order:

    timestamp,north,east,down,u,v,w,roll,pitch,yaw,throttle,aileron,elevator,rudder

Example:
    >>> from falconsim.telemetry import TelemetryFrame
    >>>
    >>> frame = sim.get_telemetry()
    >>> line = frame.to_record()
    >>> TelemetryFrame.from_record(line).pitch
"""

from typing import NamedTuple

from beartype import beartype

from falconsim.dynamics.state import AircraftState, ControlInputs

MIN_UPDATE_RATE = 1.0  # [Hz]
MAX_UPDATE_RATE = 100.0  # [Hz]
RECORD_PRECISION = 6


class TelemetryFrame(NamedTuple):
    """One telemetry sample.

    Position is NED [m], velocity is body frame [m/s], angles are radians.
    """
    timestamp: float
    position_north: float
    position_east: float
    position_down: float
    velocity_x: float
    velocity_y: float
    velocity_z: float
    roll: float
    pitch: float
    yaw: float
    throttle: float
    aileron: float
    elevator: float
    rudder: float

    @classmethod
    def from_state(
        cls,
        state: AircraftState,
        controls: ControlInputs,
        timestamp: float,
    ) -> "TelemetryFrame":
        """Build a frame from a state snapshot and control inputs."""
        north, east, down = (float(x) for x in state.position)
        u, v, w = (float(x) for x in state.velocity)
        roll, pitch, yaw = (float(x) for x in state.orientation)
        return cls(
            timestamp, north, east, down, u, v, w, roll, pitch, yaw,
            *controls.as_tuple(),
        )

    @property
    def altitude(self) -> float:
        """Altitude above the NED origin [m]."""
        return -self.position_down

    def to_record(self) -> str:
        """Serialize to a comma-delimited record."""
        return ",".join(f"{value:.{RECORD_PRECISION}f}" for value in self)

    @classmethod
    def from_record(cls, record: str) -> "TelemetryFrame":
        """Parse a comma-delimited record.

        Raises:
            ValueError: if the record does not hold exactly 14 numeric fields
        """
        parts = record.strip().split(",")
        if len(parts) != len(cls._fields):
            raise ValueError(
                f"Telemetry record must have {len(cls._fields)} fields, got {len(parts)}"
            )
        try:
            values = [float(part) for part in parts]
        except ValueError as e:
            raise ValueError(f"Malformed telemetry record: {record!r}") from e
        return cls(*values)


@beartype
def clamp_update_rate(rate_hz: float | int) -> float:
    """Clamp a telemetry polling rate to [1, 100] Hz."""
    return float(max(MIN_UPDATE_RATE, min(rate_hz, MAX_UPDATE_RATE)))
