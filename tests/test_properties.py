"""Tests for UAV physical properties and inertia validation."""

import json

import numpy as np
import pytest

from falconsim.vehicle import UAVPhysicalProperties, validate_inertia


class TestUAVPhysicalProperties:
    """Test property defaults and floors."""

    def test_defaults(self):
        props = UAVPhysicalProperties()
        assert props.wing_area == 0.5
        assert props.wingspan == 1.5
        assert props.lift_coefficient == 1.2
        assert props.drag_coefficient == 0.1
        assert props.thrust_max == 20.0
        assert props.air_density == 1.225

    def test_clamped_floors(self):
        props = UAVPhysicalProperties(
            wing_area=-1.0,
            wingspan=0.0,
            lift_coefficient=-0.5,
            drag_coefficient=-0.2,
            thrust_max=-3.0,
            air_density=0.001,
        ).clamped()
        assert props.wing_area == 0.01
        assert props.wingspan == 0.01
        assert props.lift_coefficient == -0.5
        assert props.drag_coefficient == 0.0
        assert props.thrust_max == 0.0
        assert props.air_density == 0.01

    def test_clamped_leaves_valid_values(self):
        props = UAVPhysicalProperties(wing_area=0.3, thrust_max=8.0)
        assert props.clamped() == props


class TestPropertiesPersistence:
    """Test JSON save/load."""

    def test_save_and_load(self, tmp_path):
        props = UAVPhysicalProperties(wing_area=0.35, wingspan=1.2, thrust_max=12.0)
        path = props.save(tmp_path / "trainer.json")

        assert path.exists()
        assert UAVPhysicalProperties.load(path) == props

    def test_load_accepts_string_path(self, tmp_path):
        path = tmp_path / "props.json"
        UAVPhysicalProperties(drag_coefficient=0.05).save(path)
        assert UAVPhysicalProperties.load(str(path)).drag_coefficient == 0.05

    def test_from_json_partial_and_unknown_keys(self):
        """Missing keys use defaults, unknown keys are ignored, ints become floats."""
        props = UAVPhysicalProperties.from_json(
            json.dumps({"thrust_max": 15, "color": "red"})
        )
        assert props.thrust_max == 15.0
        assert isinstance(props.thrust_max, float)
        assert props.wing_area == 0.5

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UAVPhysicalProperties.load(tmp_path / "missing.json")


class TestValidateInertia:
    """Test inertia tensor validation."""

    def test_valid_tensor_copied(self):
        inertia = np.diag([0.3, 0.4, 0.5])
        result = validate_inertia(inertia)
        result[0, 0] = 9.0
        assert inertia[0, 0] == 0.3

    def test_wrong_shape(self):
        with pytest.raises(ValueError, match="shape"):
            validate_inertia(np.ones(3))

    def test_singular(self):
        with pytest.raises(ValueError, match="invertible"):
            validate_inertia(np.diag([1.0, 1.0, 0.0]))
