"""First-order 6DOF flight dynamics for a small fixed-wing UAV.

Advances one rigid-body state by simple forward-Euler steps under thrust,
lift, drag and gravity, with control-surface moments linear in deflection.

Each ``update(dt)`` runs three phases in a fixed order:

1. Forces (body frame): thrust along +X, lift along -Z, drag opposite the
   air-relative velocity, and gravity rotated from NED with the rotation
   cached by the *previous* step. ``v += F/m * dt``.
2. Moments (body frame): roll = aileron * 2 * wingspan, pitch = elevator *
   1.5, yaw = rudder * 1.0. ``omega += I^-1 M * dt``.
3. Kinematics: recompute the rotation cache from the orientation at the start
   of this phase, integrate NED position with the rotated body velocity and
   integrate Euler angles with ``W(phi, theta) @ omega``.

The model is not thread-safe; ``falconsim.simulation.Simulation`` serializes
access to it.

Example:
    >>> import numpy as np
    >>> from falconsim.dynamics import AircraftState, ControlInputs, FlightDynamics
    >>>
    >>> model = FlightDynamics()
    >>> model.set_state(AircraftState(velocity=np.array([15.0, 0.0, 0.0])))
    >>> model.set_controls(ControlInputs(throttle=0.6, elevator=0.1))
    >>> model.update(0.01)
    >>> state = model.get_state()
"""

import logging
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from falconsim.dynamics.kinematics import dcm_body_to_ned, euler_rates
from falconsim.dynamics.state import AircraftState, ControlInputs
from falconsim.environment.atmosphere import Atmosphere
from falconsim.vehicle.properties import (
    DEFAULT_INERTIA,
    MIN_AIR_DENSITY,
    MIN_DRAG_COEFFICIENT,
    MIN_MASS,
    MIN_THRUST_MAX,
    MIN_WING_AREA,
    MIN_WINGSPAN,
    UAVPhysicalProperties,
    validate_inertia,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

GRAVITY = 9.81  # [m/s^2]
MIN_AIRSPEED = 0.1  # Below this, lift and drag vanish [m/s]

ROLL_MOMENT_PER_SPAN = 2.0  # [N*m per m of span at full aileron]
PITCH_MOMENT = 1.5  # [N*m at full elevator]
YAW_MOMENT = 1.0  # [N*m at full rudder]


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class DynamicsConfig:
    """Configuration for the flight dynamics model.

    Attributes:
        use_atmosphere: Refresh air density from the standard atmosphere at
            the current altitude before every step
    """
    use_atmosphere: bool = False

    def create_atmosphere(self) -> Atmosphere | None:
        """Create atmosphere model from config."""
        return Atmosphere() if self.use_atmosphere else None


# =============================================================================
# Flight Dynamics Model
# =============================================================================


@beartype
class FlightDynamics:
    """Rigid-body UAV flight dynamics model.

    Owns one aircraft state, one set of control inputs and the vehicle
    properties. Out-of-range inputs are clamped, never rejected.

    Example:
        >>> model = FlightDynamics(inertia=np.diag([0.3, 0.5, 0.7]))
        >>> model.set_controls(ControlInputs(throttle=1.0))
        >>> for _ in range(100):
        ...     model.update(0.01)
    """

    def __init__(
        self,
        inertia: NDArray[np.float64] | None = None,
        config: DynamicsConfig | None = None,
    ) -> None:
        """Initialize the model at rest at the NED origin.

        Args:
            inertia: 3x3 inertia tensor in body frame [kg*m^2]; fixed for
                the life of the model
            config: Dynamics configuration
        """
        self._inertia = validate_inertia(DEFAULT_INERTIA if inertia is None else inertia)
        self._inertia_inv = np.linalg.inv(self._inertia)
        self.config = config or DynamicsConfig()
        self._atmosphere = self.config.create_atmosphere()

        self._state = AircraftState()
        self._controls = ControlInputs()
        self._properties = UAVPhysicalProperties()
        self._wind_ned = np.zeros(3)

        self._body_to_ned = np.eye(3)
        self._ned_to_body = np.eye(3)

    # -------------------------------------------------------------------------
    # State and controls
    # -------------------------------------------------------------------------

    def get_state(self) -> AircraftState:
        """Copy of the current state."""
        return self._state.copy()

    def set_state(self, state: AircraftState) -> None:
        """Replace the state unconditionally (no clamping)."""
        self._state = state.copy()

    def get_controls(self) -> ControlInputs:
        """Current control inputs."""
        return self._controls

    def set_controls(self, controls: ControlInputs) -> None:
        """Store control inputs, clamped to their valid ranges."""
        self._controls = controls.clamped()

    # -------------------------------------------------------------------------
    # Properties and environment
    # -------------------------------------------------------------------------

    def get_properties(self) -> UAVPhysicalProperties:
        """Copy of the current vehicle properties."""
        return self._properties.copy()

    def set_properties(self, properties: UAVPhysicalProperties) -> None:
        """Replace all vehicle properties, each floored to its minimum."""
        self._properties = properties.clamped()

    @property
    def inertia(self) -> NDArray[np.float64]:
        """Inertia tensor [kg*m^2] (read-only copy)."""
        return self._inertia.copy()

    @property
    def body_to_ned(self) -> NDArray[np.float64]:
        """Cached body-to-NED rotation from the last update."""
        return self._body_to_ned.copy()

    @property
    def ned_to_body(self) -> NDArray[np.float64]:
        """Cached NED-to-body rotation from the last update."""
        return self._ned_to_body.copy()

    def set_air_density(self, density: float | int) -> None:
        """Set ambient air density [kg/m^3], floored to 0.01."""
        self._properties.air_density = float(max(MIN_AIR_DENSITY, density))

    def set_mass(self, mass: float | int) -> None:
        """Set vehicle mass [kg], floored to 0.1."""
        self._state.mass = float(max(MIN_MASS, mass))

    def set_wing_area(self, area: float | int) -> None:
        """Set wing reference area [m^2], floored to 0.01."""
        self._properties.wing_area = float(max(MIN_WING_AREA, area))

    def set_wingspan(self, span: float | int) -> None:
        """Set wingspan [m], floored to 0.01."""
        self._properties.wingspan = float(max(MIN_WINGSPAN, span))

    def set_lift_coefficient(self, cl: float | int) -> None:
        """Set lift coefficient (sign unrestricted)."""
        self._properties.lift_coefficient = float(cl)

    def set_drag_coefficient(self, cd: float | int) -> None:
        """Set drag coefficient, floored to 0."""
        self._properties.drag_coefficient = float(max(MIN_DRAG_COEFFICIENT, cd))

    def set_thrust_max(self, thrust: float | int) -> None:
        """Set full-throttle thrust [N], floored to 0."""
        self._properties.thrust_max = float(max(MIN_THRUST_MAX, thrust))

    def get_wind(self) -> NDArray[np.float64]:
        """Steady wind vector in NED frame [m/s]."""
        return self._wind_ned.copy()

    def set_wind(self, wind_ned: NDArray[np.float64]) -> None:
        """Set a steady wind vector in NED frame [m/s]."""
        if wind_ned.shape != (3,):
            raise ValueError(f"Wind must be shape (3,), got {wind_ned.shape}")
        self._wind_ned = wind_ned.copy()

    # -------------------------------------------------------------------------
    # Forces and moments (body frame)
    # -------------------------------------------------------------------------

    def airspeed_vector(self) -> NDArray[np.float64]:
        """Air-relative velocity in body frame [m/s]."""
        return self._state.velocity - self._ned_to_body @ self._wind_ned

    def _aero_magnitude(self, coefficient: float, airspeed: float) -> float:
        props = self._properties
        return 0.5 * props.air_density * airspeed**2 * coefficient * props.wing_area

    def lift_force(self) -> NDArray[np.float64]:
        """Lift along body -Z [N]; zero below the minimum airspeed."""
        airspeed = float(np.linalg.norm(self.airspeed_vector()))
        if airspeed < MIN_AIRSPEED:
            return np.zeros(3)
        lift = self._aero_magnitude(self._properties.lift_coefficient, airspeed)
        return np.array([0.0, 0.0, -lift])

    def drag_force(self) -> NDArray[np.float64]:
        """Drag opposite the air-relative velocity [N]; zero below the minimum airspeed."""
        v_air = self.airspeed_vector()
        airspeed = float(np.linalg.norm(v_air))
        if airspeed < MIN_AIRSPEED:
            return np.zeros(3)
        drag = self._aero_magnitude(self._properties.drag_coefficient, airspeed)
        return -v_air / airspeed * drag

    def thrust_force(self) -> NDArray[np.float64]:
        """Thrust along body +X [N]."""
        return np.array([self._controls.throttle * self._properties.thrust_max, 0.0, 0.0])

    def gravity_force(self) -> NDArray[np.float64]:
        """Weight rotated into body frame with the cached rotation [N]."""
        weight_ned = np.array([0.0, 0.0, self._state.mass * GRAVITY])
        return self._ned_to_body @ weight_ned

    def total_force(self) -> NDArray[np.float64]:
        """Sum of thrust, lift, drag and gravity in body frame [N]."""
        return self.thrust_force() + self.lift_force() + self.drag_force() + self.gravity_force()

    def control_moment(self) -> NDArray[np.float64]:
        """Control-surface moment [Mx, My, Mz] in body frame [N*m]."""
        c = self._controls
        return np.array([
            c.aileron * ROLL_MOMENT_PER_SPAN * self._properties.wingspan,
            c.elevator * PITCH_MOMENT,
            c.rudder * YAW_MOMENT,
        ])

    # -------------------------------------------------------------------------
    # Integration
    # -------------------------------------------------------------------------

    def update(self, dt: float | int) -> None:
        """Advance the state by ``dt`` seconds."""
        if self._atmosphere is not None:
            self.set_air_density(self._atmosphere.density(self._state.altitude))

        self._update_forces(dt)
        self._update_moments(dt)
        self._integrate_state(dt)

    def _update_forces(self, dt: float | int) -> None:
        acceleration = self.total_force() / self._state.mass
        self._state.velocity = self._state.velocity + acceleration * dt

    def _update_moments(self, dt: float | int) -> None:
        angular_accel = self._inertia_inv @ self.control_moment()
        self._state.angular_velocity = self._state.angular_velocity + angular_accel * dt

    def _update_rotation_matrices(self) -> None:
        self._body_to_ned = dcm_body_to_ned(self._state.orientation)
        self._ned_to_body = self._body_to_ned.T.copy()

    def _integrate_state(self, dt: float | int) -> None:
        self._update_rotation_matrices()

        velocity_ned = self._body_to_ned @ self._state.velocity
        self._state.position = self._state.position + velocity_ned * dt

        rates = euler_rates(self._state.orientation, self._state.angular_velocity)
        if not np.all(np.isfinite(rates)):
            logger.debug(
                "Non-finite Euler rates at pitch %.6f rad (gimbal lock)",
                self._state.orientation[1],
            )
        self._state.orientation = self._state.orientation + rates * dt
