"""Real-time simulation driver.

Runs one flight dynamics model on a dedicated background thread and exposes
a thread-safe facade to any number of caller threads (display, telemetry,
input devices).

Architecture:
    The loop thread repeatedly measures the wall-clock time since its
    previous iteration, advances the model by that amount unless paused,
    and waits one nominal timestep. Callers interact only through:
    - sim.start() / sim.stop() / sim.pause() / sim.resume()
    - sim.get_state() / sim.set_state(state)
    - sim.set_thrust(throttle) / sim.set_control_surfaces(a, e, r)

    A single lock guards the model. It is held for one integration step or
    one accessor call, never across the pacing wait, so no caller observes
    a partially updated state. Latest value wins; there is no queuing.

Lifecycle:
    STOPPED --start()--> RUNNING <--pause()/resume()--> PAUSED --stop()--> STOPPED

    The driver must be stopped before it is discarded. Using it as a context
    manager guarantees that: the loop thread is joined on exit.

Example:
    >>> from falconsim.simulation import Simulation
    >>>
    >>> with Simulation(timestep=0.01) as sim:
    ...     sim.set_thrust(0.8)
    ...     time.sleep(1.0)
    ...     print(sim.get_state().velocity)
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum, auto

from beartype import beartype

from falconsim.dynamics.flight_dynamics import FlightDynamics
from falconsim.dynamics.state import AircraftState, ControlInputs, clamp
from falconsim.telemetry import TelemetryFrame

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation driver configuration.

    Attributes:
        timestep: Nominal loop period [s]; the loop waits this long between
            iterations, the model step is the measured wall-clock interval
    """
    timestep: float | int = 0.01

    def __post_init__(self) -> None:
        if self.timestep <= 0.0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        self.timestep = float(self.timestep)

    @property
    def rate_hz(self) -> float:
        """Nominal loop rate [Hz]."""
        return 1.0 / self.timestep


class SimulationStatus(Enum):
    """Driver lifecycle state."""
    STOPPED = auto()
    RUNNING = auto()
    PAUSED = auto()


# =============================================================================
# Simulation Driver
# =============================================================================


@beartype
class Simulation:
    """Thread-safe real-time driver around a FlightDynamics model.

    Example:
        >>> sim = Simulation(timestep=0.01)
        >>> sim.set_state(AircraftState.at_altitude(100.0))
        >>> sim.start()
        >>> sim.set_thrust(0.8)
        >>> sim.set_control_surfaces(0.3, 0.0, 0.0)
        >>> state = sim.get_state()
        >>> sim.stop()
    """

    def __init__(
        self,
        timestep: float | int = 0.01,
        config: SimConfig | None = None,
        physics: FlightDynamics | None = None,
    ) -> None:
        """Create a stopped simulation.

        Args:
            timestep: Nominal loop period [s] (ignored when config is given)
            config: Driver configuration
            physics: Pre-configured model to take ownership of; a default
                FlightDynamics is created otherwise
        """
        self.config = config or SimConfig(timestep=timestep)
        self._physics = physics or FlightDynamics()

        self._lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        self._running = False
        self._paused = False
        self._step_count = 0

    def __enter__(self) -> "Simulation":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def status(self) -> SimulationStatus:
        """Current lifecycle state."""
        if not self._running:
            return SimulationStatus.STOPPED
        return SimulationStatus.PAUSED if self._paused else SimulationStatus.RUNNING

    @property
    def is_running(self) -> bool:
        """True while the loop thread is active (paused or not)."""
        return self._running

    @property
    def is_paused(self) -> bool:
        """True while physics updates are suspended."""
        return self._paused

    @property
    def step_count(self) -> int:
        """Number of physics updates performed since construction."""
        with self._lock:
            return self._step_count

    def start(self) -> None:
        """Spawn the loop thread.

        Raises:
            RuntimeError: if the simulation is already running
        """
        with self._lifecycle_lock:
            if self._running:
                logger.warning("start() called on a running simulation")
                raise RuntimeError("Simulation already running")

            if self._thread is not None:
                # Loop exited on its own (update failure); reap it first.
                self._thread.join()

            self._stop_event.clear()
            with self._lock:
                self._paused = False
            self._running = True
            self._thread = threading.Thread(
                target=self._run,
                name="falconsim-loop",
                daemon=True,
            )
            self._thread.start()

        logger.info("Simulation started (timestep %.4f s)", self.config.timestep)

    def stop(self) -> None:
        """Stop the loop and wait for the thread to exit. Idempotent."""
        with self._lifecycle_lock:
            self._running = False
            self._stop_event.set()
            thread, self._thread = self._thread, None

        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join()
        logger.info("Simulation stopped after %d steps", self.step_count)

    def pause(self) -> None:
        """Suspend physics updates; the loop thread keeps running."""
        with self._lock:
            self._paused = True
        logger.info("Simulation paused")

    def resume(self) -> None:
        """Resume physics updates."""
        with self._lock:
            self._paused = False
        logger.info("Simulation resumed")

    def _run(self) -> None:
        """Loop thread body."""
        timestep = self.config.timestep
        last_time = time.perf_counter()

        try:
            while not self._stop_event.is_set():
                now = time.perf_counter()
                dt = now - last_time
                last_time = now

                with self._lock:
                    if not self._paused:
                        self._physics.update(dt)
                        self._step_count += 1

                self._stop_event.wait(timestep)
        except Exception:
            logger.exception("Simulation loop failed; stopping")
            self._running = False

    # -------------------------------------------------------------------------
    # State and controls
    # -------------------------------------------------------------------------

    def get_state(self) -> AircraftState:
        """Consistent copy of the current state."""
        with self._lock:
            return self._physics.get_state()

    def set_state(self, state: AircraftState) -> None:
        """Replace the aircraft state."""
        with self._lock:
            self._physics.set_state(state)

    def get_controls(self) -> ControlInputs:
        """Current control inputs."""
        with self._lock:
            return self._physics.get_controls()

    def set_thrust(self, throttle: float | int) -> None:
        """Set throttle, clamped to [0, 1]; other controls are kept."""
        with self._lock:
            controls = self._physics.get_controls()
            self._physics.set_controls(replace(controls, throttle=clamp(throttle, 0.0, 1.0)))

    def set_control_surfaces(
        self,
        aileron: float | int,
        elevator: float | int,
        rudder: float | int,
    ) -> None:
        """Set control surface deflections, each clamped to [-1, 1]; throttle is kept."""
        with self._lock:
            controls = self._physics.get_controls()
            self._physics.set_controls(replace(
                controls,
                aileron=clamp(aileron, -1.0, 1.0),
                elevator=clamp(elevator, -1.0, 1.0),
                rudder=clamp(rudder, -1.0, 1.0),
            ))

    def get_telemetry(self) -> TelemetryFrame:
        """State and controls sampled under one lock, stamped with wall-clock time."""
        with self._lock:
            state = self._physics.get_state()
            controls = self._physics.get_controls()
        return TelemetryFrame.from_state(state, controls, time.time())

    # -------------------------------------------------------------------------
    # Model access
    # -------------------------------------------------------------------------

    def get_physics(self) -> FlightDynamics:
        """The owned model, for property configuration before start()."""
        return self._physics

    @contextmanager
    def locked_physics(self):
        """Hold the loop lock while configuring the model of a running simulation.

        Example:
            >>> with sim.locked_physics() as physics:
            ...     physics.set_wing_area(0.4)
        """
        with self._lock:
            yield self._physics
