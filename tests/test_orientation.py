"""Panel pose and incidence metric tests."""

import math

import numpy as np
import pytest

from solartracker.ephemeris import compute_sun_position, direction_vector
from solartracker.models import PanelGeometry, PanelPose, SunPosition, TrackingMode
from solartracker.orientation import (
    compute_incidence_metrics,
    compute_panel_pose,
    panel_corners,
)


def _sun(azimuth: float, elevation: float) -> SunPosition:
    return SunPosition(
        azimuth_deg=azimuth,
        elevation_deg=elevation,
        direction=direction_vector(azimuth, elevation),
    )


class TestAutoTracking:
    def test_copies_sun_angles(self):
        pose = compute_panel_pose(TrackingMode.AUTO, _sun(135.0, 40.0), 10.0, 10.0)
        assert pose.pitch_deg == pytest.approx(40.0)
        assert pose.yaw_deg == pytest.approx(135.0)

    def test_normal_matches_sun_direction(self, paris_solstice):
        sun = compute_sun_position(paris_solstice)
        pose = compute_panel_pose(TrackingMode.AUTO, sun, 0.0, 0.0)
        assert pose.normal == pytest.approx(sun.direction, abs=1e-12)
        metrics = compute_incidence_metrics(sun.direction, pose.normal)
        assert metrics.incidence_angle_deg == pytest.approx(0.0, abs=1e-4)
        assert metrics.efficiency == pytest.approx(1.0)

    def test_sun_below_horizon_pitch_clamped(self):
        sun = _sun(270.0, -3.0)
        pose = compute_panel_pose(TrackingMode.AUTO, sun, 45.0, 90.0)
        assert pose.pitch_deg == 0.0
        assert pose.yaw_deg == pytest.approx(270.0)
        metrics = compute_incidence_metrics(sun.direction, pose.normal)
        assert metrics.incidence_angle_deg == pytest.approx(3.0, abs=1e-9)
        assert metrics.efficiency == pytest.approx(math.cos(math.radians(3.0)))


class TestManualMode:
    @pytest.mark.parametrize(
        "pitch, yaw, expected_pitch, expected_yaw",
        [
            (30.0, 180.0, 30.0, 180.0),
            (120.0, 370.0, 90.0, 10.0),
            (-10.0, -90.0, 0.0, 270.0),
            (90.0, 360.0, 90.0, 0.0),
        ],
    )
    def test_clamped_and_normalized(self, pitch, yaw, expected_pitch, expected_yaw):
        pose = compute_panel_pose(TrackingMode.MANUAL, _sun(100.0, 20.0), pitch, yaw)
        assert pose.pitch_deg == pytest.approx(expected_pitch)
        assert pose.yaw_deg == pytest.approx(expected_yaw)

    def test_ignores_sun(self):
        poses = [
            compute_panel_pose(TrackingMode.MANUAL, _sun(az, el), 25.0, 200.0)
            for az, el in [(0.0, -5.0), (90.0, 10.0), (180.0, 60.0), (300.0, 89.0)]
        ]
        assert all(p == poses[0] for p in poses)

    def test_flat_panel_normal_points_up(self):
        pose = compute_panel_pose(TrackingMode.MANUAL, _sun(0.0, 0.0), 90.0, 123.0)
        assert pose.normal == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_upright_panel_facing_south(self):
        pose = compute_panel_pose(TrackingMode.MANUAL, _sun(0.0, 0.0), 0.0, 180.0)
        assert pose.normal == pytest.approx((0.0, 0.0, -1.0), abs=1e-12)

    def test_normal_is_unit(self):
        for pitch in (0.0, 15.0, 45.0, 89.0):
            for yaw in (0.0, 77.0, 181.0, 359.0):
                pose = compute_panel_pose(TrackingMode.MANUAL, _sun(0.0, 0.0), pitch, yaw)
                assert np.linalg.norm(pose.normal) == pytest.approx(1.0, abs=1e-6)


class TestIncidenceMetrics:
    def test_aligned(self):
        v = direction_vector(200.0, 35.0)
        metrics = compute_incidence_metrics(v, v)
        assert metrics.incidence_angle_deg == pytest.approx(0.0, abs=1e-4)
        assert metrics.efficiency == pytest.approx(1.0)

    def test_opposite(self):
        v = direction_vector(200.0, 35.0)
        opposite = tuple(-c for c in v)
        metrics = compute_incidence_metrics(v, opposite)
        assert metrics.incidence_angle_deg == pytest.approx(180.0, abs=1e-4)
        assert metrics.efficiency == 0.0

    def test_perpendicular(self):
        metrics = compute_incidence_metrics((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert metrics.incidence_angle_deg == pytest.approx(90.0)
        assert metrics.efficiency == pytest.approx(0.0, abs=1e-12)

    def test_sixty_degrees_is_half(self):
        metrics = compute_incidence_metrics(
            direction_vector(0.0, 60.0), (0.0, 1.0, 0.0)
        )
        assert metrics.incidence_angle_deg == pytest.approx(30.0)
        metrics = compute_incidence_metrics(
            direction_vector(0.0, 30.0), (0.0, 1.0, 0.0)
        )
        assert metrics.efficiency == pytest.approx(0.5)

    def test_dot_overshoot_is_clamped(self):
        v = (1.0 + 1e-12, 0.0, 0.0)
        metrics = compute_incidence_metrics(v, v)
        assert metrics.incidence_angle_deg == 0.0
        assert metrics.efficiency == 1.0

    def test_efficiency_bounds(self):
        for az in range(0, 360, 30):
            for el in (-5.0, 0.0, 30.0, 89.0):
                m = compute_incidence_metrics(
                    direction_vector(az, el), direction_vector(180.0, 45.0)
                )
                assert 0.0 <= m.efficiency <= 1.0
                assert 0.0 <= m.incidence_angle_deg <= 180.0


class TestPanelCorners:
    def test_flat_panel_sits_at_mast_top(self):
        pose = PanelPose(pitch_deg=90.0, yaw_deg=30.0, normal=direction_vector(30.0, 90.0))
        corners = panel_corners(pose, PanelGeometry(2.0, 1.2, 1.5))
        assert corners[:, 1] == pytest.approx([1.5] * 4, abs=1e-12)

    def test_upright_south_panel(self):
        pose = PanelPose(pitch_deg=0.0, yaw_deg=180.0, normal=direction_vector(180.0, 0.0))
        corners = panel_corners(pose, PanelGeometry(2.0, 1.2, 1.2))
        assert corners[:, 2] == pytest.approx([0.0] * 4, abs=1e-12)
        assert corners[:, 0].max() - corners[:, 0].min() == pytest.approx(2.0)
        assert corners[:, 1].max() - corners[:, 1].min() == pytest.approx(1.2)

    def test_corners_lie_in_panel_plane(self):
        pose = compute_panel_pose(TrackingMode.MANUAL, _sun(0.0, 0.0), 37.0, 211.0)
        geometry = PanelGeometry(2.5, 1.0, 2.0)
        corners = panel_corners(pose, geometry)
        center = np.array([0.0, geometry.mast_height_m, 0.0])
        offsets = corners - center
        assert offsets @ np.array(pose.normal) == pytest.approx([0.0] * 4, abs=1e-12)
        edges = np.linalg.norm(np.diff(np.vstack([corners, corners[:1]]), axis=0), axis=1)
        assert edges == pytest.approx([2.5, 1.0, 2.5, 1.0])
