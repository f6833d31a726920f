"""Unit tests for the real-time simulation driver.

These tests start the background loop thread, so they rely on wall-clock
sleeps; assertions only check ordering and monotonicity, never exact values.
"""

import logging
import threading
import time

import numpy as np
import pytest
from numpy.testing import assert_allclose

from falconsim.dynamics import AircraftState, ControlInputs, FlightDynamics
from falconsim.simulation import SimConfig, Simulation, SimulationStatus


@pytest.fixture
def sim():
    simulation = Simulation(timestep=0.01)
    yield simulation
    simulation.stop()


def wait_for(predicate, timeout=2.0):
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class RecordingDynamics(FlightDynamics):
    """Records every dt the loop passes to update()."""

    def __init__(self):
        super().__init__()
        self.dts = []

    def update(self, dt):
        self.dts.append(dt)
        super().update(dt)


class FailingDynamics(FlightDynamics):
    """Raises on the first update."""

    def update(self, dt):
        raise RuntimeError("model blew up")


# =============================================================================
# Configuration Tests
# =============================================================================


class TestSimConfig:
    """Test driver configuration."""

    def test_default_timestep(self):
        config = SimConfig()
        assert config.timestep == 0.01
        assert_allclose(config.rate_hz, 100.0)

    @pytest.mark.parametrize("timestep", [0.0, -0.01])
    def test_non_positive_timestep_rejected(self, timestep):
        with pytest.raises(ValueError, match="timestep"):
            SimConfig(timestep=timestep)

    def test_config_overrides_timestep(self):
        sim = Simulation(timestep=0.5, config=SimConfig(timestep=0.02))
        assert sim.config.timestep == 0.02


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestLifecycle:
    """Test start/stop/pause/resume."""

    def test_initially_stopped(self, sim):
        assert sim.status is SimulationStatus.STOPPED
        assert not sim.is_running
        assert sim.get_state() == AircraftState()

    def test_state_unchanged_before_start(self, sim):
        time.sleep(0.05)
        assert sim.step_count == 0
        assert sim.get_state() == AircraftState()

    def test_stop_without_start(self):
        """stop() on a never-started driver is a no-op and can repeat."""
        sim = Simulation()
        sim.stop()
        sim.stop()
        assert sim.status is SimulationStatus.STOPPED

    def test_double_start_raises(self, sim, caplog):
        sim.start()
        with caplog.at_level(logging.WARNING, logger="falconsim.simulation.simulator"):
            with pytest.raises(RuntimeError, match="already running"):
                sim.start()
        assert "running simulation" in caplog.text
        assert sim.is_running

    def test_status_transitions(self, sim):
        sim.start()
        assert sim.status is SimulationStatus.RUNNING
        sim.pause()
        assert sim.status is SimulationStatus.PAUSED
        assert sim.is_running and sim.is_paused
        sim.resume()
        assert sim.status is SimulationStatus.RUNNING
        sim.stop()
        assert sim.status is SimulationStatus.STOPPED

    def test_stop_is_prompt(self):
        """stop() interrupts the pacing wait instead of sleeping it out."""
        sim = Simulation(timestep=1.0)
        sim.start()
        time.sleep(0.05)

        start = time.monotonic()
        sim.stop()
        assert time.monotonic() - start < 0.5
        assert not any(t.name == "falconsim-loop" and t.is_alive() for t in threading.enumerate())

    def test_restart(self, sim):
        sim.start()
        wait_for(lambda: sim.step_count > 0)
        sim.stop()
        count = sim.step_count

        sim.start()
        assert wait_for(lambda: sim.step_count > count)
        sim.stop()

    def test_context_manager(self):
        with Simulation(timestep=0.01) as sim:
            assert sim.is_running
            assert wait_for(lambda: sim.step_count > 0)
        assert sim.status is SimulationStatus.STOPPED

    def test_resume_after_stop_is_inert(self, sim):
        """pause/resume only toggle the flag; they never start the loop."""
        sim.resume()
        sim.pause()
        assert sim.status is SimulationStatus.STOPPED


# =============================================================================
# Physics Loop Tests
# =============================================================================


class TestPhysicsLoop:
    """Test that the loop advances the model."""

    def test_gravity_acts_while_running(self, sim):
        sim.start()
        assert wait_for(lambda: sim.get_state().velocity[2] > 0.0)

    def test_pause_freezes_state(self, sim):
        sim.start()
        assert wait_for(lambda: sim.step_count > 2)
        sim.pause()

        frozen = sim.get_state()
        steps = sim.step_count
        time.sleep(0.1)
        assert sim.get_state() == frozen
        assert sim.step_count == steps

        sim.resume()
        assert wait_for(lambda: sim.get_state() != frozen)

    def test_paused_interval_not_integrated(self):
        """The first step after resume covers one loop period, not the pause."""
        physics = RecordingDynamics()
        sim = Simulation(timestep=0.01, physics=physics)
        sim.start()
        try:
            wait_for(lambda: sim.step_count > 2)
            sim.pause()
            time.sleep(0.3)
            resumed_at = sim.step_count
            sim.resume()
            assert wait_for(lambda: sim.step_count > resumed_at + 3)
        finally:
            sim.stop()

        assert max(physics.dts) < 0.2

    def test_thrust_accelerates(self, sim):
        sim.set_thrust(1.0)
        sim.start()
        assert wait_for(lambda: sim.get_state().velocity[0] > 0.0)

    def test_update_failure_stops_loop(self, caplog):
        sim = Simulation(physics=FailingDynamics())
        with caplog.at_level(logging.ERROR, logger="falconsim.simulation.simulator"):
            sim.start()
            assert wait_for(lambda: not sim.is_running)
        assert sim.status is SimulationStatus.STOPPED
        assert "model blew up" in caplog.text

        sim.stop()
        sim.start()
        assert wait_for(lambda: not sim.is_running)
        sim.stop()

    def test_concurrent_access(self, sim):
        """Concurrent readers and writers never see a torn or invalid state."""
        sim.set_state(AircraftState.at_altitude(100.0, airspeed=12.0))
        sim.start()
        errors = []
        done = threading.Event()

        def writer():
            i = 0
            while not done.is_set():
                sim.set_thrust((i % 10) / 10.0)
                sim.set_control_surfaces(0.01, -0.01, 0.0)
                i += 1

        def reader():
            while not done.is_set():
                state = sim.get_state()
                controls = sim.get_controls()
                if state.position.shape != (3,) or not 0.0 <= controls.throttle <= 1.0:
                    errors.append((state, controls))

        threads = [threading.Thread(target=writer), threading.Thread(target=reader),
                   threading.Thread(target=reader)]
        for t in threads:
            t.start()
        time.sleep(0.2)
        done.set()
        for t in threads:
            t.join()

        assert errors == []
        assert sim.get_state().is_finite()


# =============================================================================
# Accessor Tests
# =============================================================================


class TestAccessors:
    """Test the thread-safe facade."""

    @pytest.mark.parametrize("throttle,expected", [(-1.0, 0.0), (5.0, 1.0), (0.6, 0.6)])
    def test_set_thrust_clamps(self, sim, throttle, expected):
        sim.set_thrust(throttle)
        assert sim.get_controls().throttle == expected

    def test_set_control_surfaces_clamps(self, sim):
        sim.set_thrust(0.7)
        sim.set_control_surfaces(2.0, -2.0, 1.5)
        assert sim.get_controls() == ControlInputs(
            throttle=0.7, aileron=1.0, elevator=-1.0, rudder=1.0,
        )

    @pytest.mark.parametrize("throttle,expected", [(1, 1.0), (0, 0.0), (5, 1.0), (-3, 0.0)])
    def test_set_thrust_accepts_int(self, sim, throttle, expected):
        sim.set_thrust(throttle)
        result = sim.get_controls().throttle
        assert result == expected
        assert isinstance(result, float)

    def test_set_control_surfaces_accepts_int(self, sim):
        sim.set_control_surfaces(2, -2, 0)
        assert sim.get_controls().as_tuple() == (0.0, 1.0, -1.0, 0.0)

    def test_int_timestep(self):
        sim = Simulation(timestep=1)
        assert sim.config.timestep == 1.0
        assert isinstance(sim.config.timestep, float)

    def test_set_thrust_keeps_surfaces(self, sim):
        sim.set_control_surfaces(0.3, 0.2, -0.1)
        sim.set_thrust(0.5)
        assert sim.get_controls().as_tuple() == (0.5, 0.3, 0.2, -0.1)

    def test_set_state_round_trip(self, sim):
        state = AircraftState(
            position=np.array([0.0, 0.0, -100.0]),
            velocity=np.array([10.0, 0.0, 0.0]),
        )
        sim.set_state(state)
        assert sim.get_state() == state

    def test_telemetry(self, sim):
        sim.set_state(AircraftState.at_altitude(100.0))
        sim.set_thrust(0.8)
        before = time.time()
        frame = sim.get_telemetry()

        assert frame.altitude == 100.0
        assert frame.throttle == 0.8
        assert before <= frame.timestamp <= time.time()

    def test_locked_physics(self, sim):
        sim.start()
        with sim.locked_physics() as physics:
            physics.set_wing_area(0.4)
            physics.set_thrust_max(10.0)
        props = sim.get_physics().get_properties()
        assert props.wing_area == 0.4
        assert props.thrust_max == 10.0

    def test_injected_physics_is_used(self):
        physics = FlightDynamics(inertia=np.diag([0.2, 0.3, 0.4]))
        sim = Simulation(physics=physics)
        assert sim.get_physics() is physics
