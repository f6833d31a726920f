"""Vehicle configuration for UAV simulation.

Example:
    >>> from falconsim.vehicle import UAVPhysicalProperties
    >>>
    >>> props = UAVPhysicalProperties(wing_area=0.4).clamped()
"""

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

__all__ = [
    "UAVPhysicalProperties",
    "validate_inertia",
    # Constants
    "DEFAULT_INERTIA",
    "MIN_AIR_DENSITY",
    "MIN_DRAG_COEFFICIENT",
    "MIN_MASS",
    "MIN_THRUST_MAX",
    "MIN_WING_AREA",
    "MIN_WINGSPAN",
]
