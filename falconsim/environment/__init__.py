"""Environment models for UAV simulation.

Example:
    >>> from falconsim.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(altitude=500.0)  # kg/m^3
"""

from falconsim.environment.atmosphere import (
    Atmosphere,
    AtmosphereResult,
)

__all__ = [
    "Atmosphere",
    "AtmosphereResult",
]
