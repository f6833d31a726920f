"""Physical and aerodynamic properties of a small fixed-wing UAV.

Every property is an independent scalar. Writes through the flight dynamics
model floor each value to a physically meaningful minimum instead of
rejecting it; the lift coefficient is the only unclamped property since a
negative value is a legitimate (inverted) configuration.

Defaults describe a ~1 kg hand-launched UAV at sea level.

Example:
    >>> from falconsim.vehicle import UAVPhysicalProperties
    >>>
    >>> props = UAVPhysicalProperties(wing_area=0.35, thrust_max=12.0)
    >>> props.save("trainer.json")
    >>> same = UAVPhysicalProperties.load("trainer.json")
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

# Floors applied on write
MIN_WING_AREA = 0.01  # [m^2]
MIN_WINGSPAN = 0.01  # [m]
MIN_DRAG_COEFFICIENT = 0.0
MIN_THRUST_MAX = 0.0  # [N]
MIN_AIR_DENSITY = 0.01  # [kg/m^3]
MIN_MASS = 0.1  # [kg]

# Principal moments of inertia (Ixx, Iyy, Izz) [kg*m^2]
DEFAULT_INERTIA: NDArray[np.float64] = np.diag([0.5, 0.8, 1.0])


# =============================================================================
# Properties
# =============================================================================


@beartype
@dataclass
class UAVPhysicalProperties:
    """Aerodynamic and propulsive configuration.

    Attributes:
        wing_area: Wing reference area [m^2]
        wingspan: Wingspan [m] (roll moment arm scales with it)
        lift_coefficient: Lift coefficient CL [-]
        drag_coefficient: Drag coefficient CD [-]
        thrust_max: Thrust at full throttle [N]
        air_density: Ambient air density [kg/m^3]
    """
    wing_area: float | int = 0.5
    wingspan: float | int = 1.5
    lift_coefficient: float | int = 1.2
    drag_coefficient: float | int = 0.1
    thrust_max: float | int = 20.0
    air_density: float | int = 1.225

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, float(getattr(self, f.name)))

    def clamped(self) -> "UAVPhysicalProperties":
        """Return a copy with every property floored to its minimum."""
        return UAVPhysicalProperties(
            wing_area=max(MIN_WING_AREA, self.wing_area),
            wingspan=max(MIN_WINGSPAN, self.wingspan),
            lift_coefficient=self.lift_coefficient,
            drag_coefficient=max(MIN_DRAG_COEFFICIENT, self.drag_coefficient),
            thrust_max=max(MIN_THRUST_MAX, self.thrust_max),
            air_density=max(MIN_AIR_DENSITY, self.air_density),
        )

    def copy(self) -> "UAVPhysicalProperties":
        """Create a copy of these properties."""
        return UAVPhysicalProperties(**asdict(self))

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "UAVPhysicalProperties":
        """Deserialize from JSON.

        Missing keys fall back to defaults; unknown keys are ignored.
        """
        data = json.loads(json_str)
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})

    def save(self, path: str | Path) -> Path:
        """Write properties to a JSON file."""
        path = Path(path)
        path.write_text(self.to_json())
        return path

    @classmethod
    def load(cls, path: str | Path) -> "UAVPhysicalProperties":
        """Read properties from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Properties file not found at {path}")
        return cls.from_json(path.read_text())


@beartype
def validate_inertia(inertia: NDArray[np.float64]) -> NDArray[np.float64]:
    """Check that an inertia tensor is a 3x3 invertible matrix.

    Args:
        inertia: Candidate inertia tensor [kg*m^2]

    Returns:
        A float64 copy of the tensor
    """
    inertia = np.array(inertia, dtype=np.float64)
    if inertia.shape != (3, 3):
        raise ValueError(f"Inertia must be shape (3, 3), got {inertia.shape}")
    if abs(np.linalg.det(inertia)) < 1e-12:
        raise ValueError("Inertia tensor must be invertible")
    return inertia
