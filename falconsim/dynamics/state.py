"""Rigid-body aircraft state and control inputs.

The aircraft state contains:
- Position (3): [north, east, down] in the local-level NED frame [m]
- Velocity (3): [u, v, w] expressed in the body frame [m/s]
- Orientation (3): [roll, pitch, yaw] Euler angles, body-to-NED [rad]
- Angular velocity (3): [p, q, r] body rates in the body frame [rad/s]
- Mass (1): vehicle mass [kg]

Total: 13 state variables

Coordinate frames:
- NED: North-East-Down local tangent plane (altitude = -down)
- Body: Vehicle body frame (X forward, Y right, Z down)

Euler angles are not wrapped or normalized. Pitch at +/-90 degrees is a
gimbal-lock singularity of the Euler-rate transform (see kinematics).
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

STATE_SIZE = 13


def _zeros3() -> NDArray[np.float64]:
    return np.zeros(3)


@beartype
def clamp(value: float | int, lower: float, upper: float) -> float:
    """Clamp a scalar to the closed interval [lower, upper]."""
    return float(max(lower, min(value, upper)))


# =============================================================================
# Control Inputs
# =============================================================================


@beartype
@dataclass(frozen=True)
class ControlInputs:
    """Normalized pilot/autopilot commands.

    Attributes:
        throttle: Throttle setting [0, 1]
        aileron: Aileron deflection [-1, 1] (positive = right roll)
        elevator: Elevator deflection [-1, 1] (positive = pitch up)
        rudder: Rudder deflection [-1, 1] (positive = yaw right)
    """
    throttle: float | int = 0.0
    aileron: float | int = 0.0
    elevator: float | int = 0.0
    rudder: float | int = 0.0

    def __post_init__(self) -> None:
        for name in ("throttle", "aileron", "elevator", "rudder"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def clamped(self) -> "ControlInputs":
        """Return a copy with every field clamped to its valid range."""
        return ControlInputs(
            throttle=clamp(self.throttle, 0.0, 1.0),
            aileron=clamp(self.aileron, -1.0, 1.0),
            elevator=clamp(self.elevator, -1.0, 1.0),
            rudder=clamp(self.rudder, -1.0, 1.0),
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        """(throttle, aileron, elevator, rudder)."""
        return (self.throttle, self.aileron, self.elevator, self.rudder)


# =============================================================================
# Aircraft State
# =============================================================================


@beartype
@dataclass(eq=False)
class AircraftState:
    """Rigid-body state of the aircraft.

    Attributes:
        position: [north, east, down] position in NED frame [m]
        velocity: [u, v, w] velocity in body frame [m/s]
        orientation: [roll, pitch, yaw] Euler angles [rad]
        angular_velocity: [p, q, r] body angular rates [rad/s]
        mass: vehicle mass [kg]
    """
    position: NDArray[np.float64] = field(default_factory=_zeros3)
    velocity: NDArray[np.float64] = field(default_factory=_zeros3)
    orientation: NDArray[np.float64] = field(default_factory=_zeros3)
    angular_velocity: NDArray[np.float64] = field(default_factory=_zeros3)
    mass: float | int = 1.0

    def __post_init__(self) -> None:
        """Validate vector shapes."""
        for name in ("position", "velocity", "orientation", "angular_velocity"):
            shape = getattr(self, name).shape
            if shape != (3,):
                raise ValueError(f"{name} must be shape (3,), got {shape}")
        self.mass = float(self.mass)

    def __eq__(self, other):
        if not isinstance(other, AircraftState):
            return NotImplemented
        return (
            np.array_equal(self.position, other.position)
            and np.array_equal(self.velocity, other.velocity)
            and np.array_equal(self.orientation, other.orientation)
            and np.array_equal(self.angular_velocity, other.angular_velocity)
            and self.mass == other.mass
        )

    __hash__ = None

    @classmethod
    def at_altitude(
        cls,
        altitude: float | int,
        airspeed: float | int = 0.0,
        heading_deg: float | int = 0.0,
        mass_kg: float | int = 1.0,
    ) -> "AircraftState":
        """Create a wings-level state at a given altitude.

        Args:
            altitude: Height above the NED origin [m] (positive up)
            airspeed: Forward body-frame speed [m/s]
            heading_deg: Yaw angle [degrees] (0 = north)
            mass_kg: Vehicle mass [kg]
        """
        return cls(
            position=np.array([0.0, 0.0, -altitude]),
            velocity=np.array([airspeed, 0.0, 0.0]),
            orientation=np.array([0.0, 0.0, np.radians(heading_deg)]),
            mass=mass_kg,
        )

    def to_array(self) -> NDArray[np.float64]:
        """Flatten to the 13-element state vector."""
        return np.concatenate([
            self.position,
            self.velocity,
            self.orientation,
            self.angular_velocity,
            [self.mass],
        ])

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> "AircraftState":
        """Create state from a 13-element vector."""
        if arr.shape != (STATE_SIZE,):
            raise ValueError(f"State vector must be shape ({STATE_SIZE},), got {arr.shape}")
        return cls(
            position=arr[0:3].copy(),
            velocity=arr[3:6].copy(),
            orientation=arr[6:9].copy(),
            angular_velocity=arr[9:12].copy(),
            mass=float(arr[12]),
        )

    def copy(self) -> "AircraftState":
        """Create a deep copy of this state."""
        return AircraftState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            orientation=self.orientation.copy(),
            angular_velocity=self.angular_velocity.copy(),
            mass=self.mass,
        )

    @property
    def altitude(self) -> float:
        """Altitude above the NED origin [m]."""
        return float(-self.position[2])

    @property
    def speed(self) -> float:
        """Body-frame speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    @property
    def orientation_deg(self) -> tuple[float, float, float]:
        """(roll, pitch, yaw) in degrees."""
        roll, pitch, yaw = np.degrees(self.orientation)
        return float(roll), float(pitch), float(yaw)

    def is_finite(self) -> bool:
        """True when every field is finite."""
        return bool(np.all(np.isfinite(self.to_array())))
