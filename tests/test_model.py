"""Tests for the NetworkModel session object."""

import pytest

from netcover.core.config import NetworkConfig
from netcover.core.coverage import Assignment
from netcover.core.entities import Device, Station
from netcover.core.errors import ConfigurationError, PreconditionError
from netcover.core.model import NetworkModel
from netcover.core.scaler import PixelOffset


@pytest.fixture
def model():
    return NetworkModel(
        stations=[{"x": 0, "y": 0, "reach": 10}, {"x": 100, "y": 100, "reach": 20}],
        devices=[{"x": 6, "y": 8}, {"x": 100, "y": 90}, {"x": 50, "y": 50}],
    )


class TestInit:
    def test_from_mappings(self, model):
        assert model.stations == (Station(0, 0, 10), Station(100, 100, 20))
        assert model.devices[0] == Device(6, 8)

    def test_from_dict(self):
        m = NetworkModel.from_dict({"stations": [Station(1, 1, 1)], "devices": []})
        assert m.stations == (Station(1, 1, 1),)
        assert m.devices == ()

    def test_station_reach_defaults_to_zero(self):
        assert NetworkModel(stations=[{"x": 3, "y": 4}]).stations[0].reach == 0

    def test_missing_field(self):
        with pytest.raises(ValueError, match="missing"):
            NetworkModel(devices=[{"x": 3}])

    def test_coordinate_above_bound(self):
        with pytest.raises(ConfigurationError):
            NetworkModel(devices=[{"x": 1500, "y": 0}])

    def test_custom_bound(self):
        with pytest.raises(ConfigurationError):
            NetworkModel(devices=[Device(60, 0)], config=NetworkConfig(max_coord=50))

    @pytest.mark.parametrize("station", [
        {"x": 0, "y": 0, "reach": 1e200},
        {"x": 0, "y": 0, "reach": float("inf")},
        {"x": 0, "y": 0, "reach": 1001},
        {"x": 0, "y": 0, "reach": -1},
        {"x": -3, "y": 0, "reach": 5},
        {"x": 2.5, "y": 0, "reach": 5},
        {"x": float("nan"), "y": 0, "reach": 5},
    ])
    def test_station_field_out_of_bounds(self, station):
        with pytest.raises(ConfigurationError):
            NetworkModel(stations=[station], devices=[{"x": 1, "y": 1}])

    def test_reach_checked_against_custom_bound(self):
        with pytest.raises(ConfigurationError, match="reach"):
            NetworkModel(stations=[Station(1, 1, 60)], config=NetworkConfig(max_coord=50))

    def test_integral_floats_normalised(self):
        m = NetworkModel(stations=[{"x": 5.0, "y": "7", "reach": 10.0}])
        assert m.stations == (Station(5, 7, 10),)
        assert type(m.stations[0].x) is int

    def test_empty(self):
        m = NetworkModel()
        assert m.max_point == 20
        assert m.coverage.is_empty


class TestDerived:
    def test_coverage(self, model):
        cov = model.coverage
        assert cov.assignment_for(0) == Assignment(0, 0)
        assert cov.assignment_for(1) == Assignment(1, 100)
        assert cov.assignment_for(2) is None

    def test_coverage_memoised(self, model):
        assert model.coverage is model.coverage

    def test_coverage_recomputed_after_edit(self, model):
        before = model.coverage
        model.edit_device_field(2, "x", 0)
        model.edit_device_field(2, "y", 0)
        assert model.coverage is not before
        assert model.coverage.assignment_for(2) == Assignment(0, 100)

    def test_rejected_edit_keeps_cache(self, model):
        before = model.coverage
        assert model.edit_device_field(0, "x", -5) is False
        assert model.coverage is before

    def test_max_point(self, model):
        assert model.max_point == 100

    def test_projection_before_layout(self, model):
        assert model.station_projection(0) is None
        assert model.station_ring_radius_px(0) is None

    def test_projection_after_layout(self, model):
        model.report_plot_width_px(400)
        assert model.device_projection(2) == PixelOffset(192.0, 192.0)
        assert model.station_ring_radius_px(1) == pytest.approx(80.0)

    def test_layout_cleared(self, model):
        model.report_plot_width_px(400)
        model.report_plot_width_px(None)
        assert model.device_projection(0) is None

    def test_negative_layout(self, model):
        with pytest.raises(PreconditionError):
            model.report_plot_width_px(-1)

    def test_projection_bad_index(self, model):
        with pytest.raises(PreconditionError):
            model.device_projection(3)

    @pytest.mark.parametrize("index", [True, False, 1.0, -1])
    def test_projection_rejects_non_index(self, model, index):
        model.report_plot_width_px(400)
        with pytest.raises(PreconditionError):
            model.station_projection(index)
        with pytest.raises(PreconditionError):
            model.station_ring_radius_px(index)

    @pytest.mark.parametrize("width", [float("nan"), float("inf")])
    def test_non_finite_layout(self, model, width):
        with pytest.raises(PreconditionError):
            model.report_plot_width_px(width)
        assert model.plot_length_px is None


class TestMutations:
    def test_add_station(self, model):
        old = model.stations
        assert model.add_station() == 2
        assert model.stations[2] == Station(0, 0, 0)
        assert len(old) == 2

    def test_add_device(self, model):
        assert model.add_device() == 3
        assert model.devices[3] == Device(0, 0)

    def test_remove_station_renumbers(self, model):
        model.remove_station(0)
        assert model.stations == (Station(100, 100, 20),)
        assert model.coverage.assignment_for(1) == Assignment(0, 100)
        assert model.coverage.assignment_for(0) is None

    def test_remove_device(self, model):
        model.remove_device(0)
        assert model.coverage.served_by(0) == frozenset()
        assert model.coverage.served_by(1) == frozenset({0})

    def test_remove_bad_index(self, model):
        with pytest.raises(PreconditionError):
            model.remove_station(2)

    def test_edit_station(self, model):
        old = model.stations
        assert model.edit_station_field(0, "reach", "5") is True
        assert model.stations[0] == Station(0, 0, 5)
        assert old[0] == Station(0, 0, 10)
        assert model.coverage.assignment_for(0) is None

    def test_edit_rejected(self, model):
        old = model.stations
        assert model.edit_station_field(0, "x", 1001) is False
        assert model.stations is old

    def test_edit_unknown_field(self, model):
        with pytest.raises(PreconditionError):
            model.edit_device_field(0, "reach", 3)

    def test_edit_moves_max_point(self, model):
        model.edit_device_field(0, "y", 700)
        assert model.max_point == 700


class TestSnapshot:
    def test_structure(self, model):
        model.report_plot_width_px(200)
        snap = model.snapshot()
        assert snap["max_point"] == 100
        assert snap["max_coord"] == 1000
        assert snap["plot_length_px"] == 200
        assert len(snap["stations"]) == 2
        assert len(snap["devices"]) == 3
        assert snap["stats"]["assigned_devices"] == 2

    def test_station_rows(self, model):
        rows = model.snapshot()["stations"]
        assert rows[0]["label"] == 1
        assert rows[0]["devices"] == [0]
        assert rows[0]["has_connections"] is True
        assert rows[0]["transmitting"] is True
        assert rows[0]["position_px"] is None

    def test_device_rows(self, model):
        model.report_plot_width_px(100)
        rows = model.snapshot()["devices"]
        # On the boundary: connected but at speed 0
        assert rows[0]["station_index"] == 0
        assert rows[0]["speed"] == 0
        assert rows[0]["is_active"] is False
        assert rows[1]["is_active"] is True
        assert rows[2]["station_index"] is None
        assert rows[2]["speed"] is None
        assert rows[2]["position_px"] == {"left_px": 42.0, "top_px": 42.0}

    def test_idle_station(self):
        snap = NetworkModel(stations=[Station(5, 5, 0)]).snapshot()
        assert snap["stations"][0]["transmitting"] is False
        assert snap["stations"][0]["has_connections"] is False
