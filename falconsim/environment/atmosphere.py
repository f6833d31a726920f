"""Lower US Standard Atmosphere 1976.

Temperature, pressure and density versus geometric altitude for the four
lowest layers (sea level to 47 km geopotential). Small UAVs never leave the
troposphere, so the upper layers are not modelled; above the top layer the
properties are held at their 47 km values.

- Troposphere (0-11 km): -6.5 K/km lapse rate
- Tropopause (11-20 km): isothermal at 216.65 K
- Stratosphere (20-32 km): +1.0 K/km
- Stratosphere (32-47 km): +2.8 K/km

Reference: U.S. Standard Atmosphere, 1976 (NASA-TM-X-74335)

Example:
    >>> from falconsim.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(1500.0)  # kg/m^3 at 1.5 km
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype

# =============================================================================
# Constants
# =============================================================================

T0 = 288.15  # Sea level temperature [K]
P0 = 101325.0  # Sea level pressure [Pa]
RHO0 = 1.225  # Sea level density [kg/m^3]

R_AIR = 287.05287  # Specific gas constant for dry air [J/(kg*K)]
G0 = 9.80665  # Standard gravity [m/s^2]
R_EARTH = 6356766.0  # Earth radius for geopotential altitude [m]

# (base geopotential altitude [m], base temperature [K], lapse rate [K/m])
LAYERS = (
    (0.0, 288.15, -0.0065),
    (11000.0, 216.65, 0.0),
    (20000.0, 216.65, 0.001),
    (32000.0, 228.65, 0.0028),
)
TOP_GEOPOTENTIAL = 47000.0  # [m]


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at one altitude.

    Attributes:
        altitude: Geometric altitude [m]
        temperature: Static temperature [K]
        pressure: Static pressure [Pa]
        density: Air density [kg/m^3]
    """
    altitude: float
    temperature: float
    pressure: float
    density: float


# =============================================================================
# Atmosphere Model
# =============================================================================


def _layer_pressure(p_base: float, t_base: float, lapse: float, dh: float) -> float:
    if lapse == 0.0:
        return p_base * float(np.exp(-G0 * dh / (R_AIR * t_base)))
    t = t_base + lapse * dh
    return p_base * float((t / t_base) ** (-G0 / (R_AIR * lapse)))


@beartype
class Atmosphere:
    """Standard atmosphere lookups by geometric altitude.

    Negative altitudes return sea level conditions.
    """

    def __init__(self) -> None:
        """Precompute the pressure at the base of each layer."""
        self._base_pressures = [P0]
        for (h0, t0, lapse), (h1, _, _) in zip(LAYERS, LAYERS[1:]):
            self._base_pressures.append(
                _layer_pressure(self._base_pressures[-1], t0, lapse, h1 - h0)
            )

    @staticmethod
    def geopotential(altitude: float) -> float:
        """Convert geometric to geopotential altitude [m]."""
        return R_EARTH * altitude / (R_EARTH + altitude)

    def _locate(self, altitude: float) -> tuple[int, float]:
        """Layer index and height above the layer base [m]."""
        h = min(self.geopotential(max(altitude, 0.0)), TOP_GEOPOTENTIAL)
        for i in range(len(LAYERS) - 1, -1, -1):
            if h >= LAYERS[i][0]:
                return i, h - LAYERS[i][0]
        return 0, 0.0

    def temperature(self, altitude: float) -> float:
        """Temperature [K] at geometric altitude [m]."""
        i, dh = self._locate(altitude)
        _, t0, lapse = LAYERS[i]
        return t0 + lapse * dh

    def pressure(self, altitude: float) -> float:
        """Pressure [Pa] at geometric altitude [m]."""
        i, dh = self._locate(altitude)
        _, t0, lapse = LAYERS[i]
        return _layer_pressure(self._base_pressures[i], t0, lapse, dh)

    def density(self, altitude: float) -> float:
        """Density [kg/m^3] at geometric altitude [m]."""
        return self.pressure(altitude) / (R_AIR * self.temperature(altitude))

    def at_altitude(self, altitude: float) -> AtmosphereResult:
        """All properties at geometric altitude [m]."""
        return AtmosphereResult(
            altitude=altitude,
            temperature=self.temperature(altitude),
            pressure=self.pressure(altitude),
            density=self.density(altitude),
        )
