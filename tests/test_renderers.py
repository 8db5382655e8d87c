"""Renderer tests — Plotly scene, matplotlib snapshot and metrics card."""

from datetime import date

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
import pytest
from matplotlib.figure import Figure

from solartracker.compute import run
from solartracker.models import SimulatorState, TrackingMode
from solartracker.renderers.plotly_3d import SUN_DISTANCE, ground_color, render_plotly_scene
from solartracker.renderers.static import render_static_scene, save_static_scene
from solartracker.renderers.summary import metric_rows, render_text_summary


@pytest.fixture
def result(paris_solstice):
    return run(SimulatorState(observation=paris_solstice), sun_path_step_minutes=30)


@pytest.fixture
def manual_result(paris_solstice):
    state = SimulatorState(
        observation=paris_solstice,
        tracking_mode=TrackingMode.MANUAL,
        manual_pitch=30.0,
        manual_yaw=180.0,
    )
    return run(state, sun_path_step_minutes=30)


def _trace(fig: go.Figure, name: str):
    return next(tr for tr in fig.data if tr.name == name)


class TestMetricRows:
    def test_french_labels_and_format(self, manual_result):
        rows = metric_rows(manual_result, "fr")
        labels = [label for label, _ in rows]
        assert labels == ["Azimut solaire", "Hauteur solaire", "Angle d'incidence", "Flux capté"]
        assert rows[0][1] == f"{manual_result.sun.azimuth_deg:.1f}°"
        assert rows[3][1] == f"{manual_result.metrics.efficiency * 100:.0f}%"

    def test_auto_tracking_full_flux(self, result):
        assert metric_rows(result, "en")[3] == ("Captured flux", "100%")

    def test_text_summary(self, result):
        text = render_text_summary(result, "en")
        assert text.splitlines()[0] == "Instant metrics"
        assert "Solar elevation" in text
        assert len(text.splitlines()) == 5


class TestPlotlyScene:
    def test_returns_figure(self, result):
        fig = render_plotly_scene(result, lang="en")
        assert isinstance(fig, go.Figure)
        names = {tr.name for tr in fig.data}
        assert {"ground", "mast", "panel", "Sun", "Sun path", "Panel normal"} <= names

    def test_sun_marker_position(self, result):
        fig = render_plotly_scene(result, lang="en")
        sun = _trace(fig, "Sun")
        x, y, z = result.sun.direction
        # Y-up model frame drawn as (east, north, up)
        assert sun.x[0] == pytest.approx(x * SUN_DISTANCE)
        assert sun.y[0] == pytest.approx(z * SUN_DISTANCE)
        assert sun.z[0] == pytest.approx(y * SUN_DISTANCE)

    def test_sun_path_skips_night(self, result):
        path = _trace(render_plotly_scene(result, lang="en"), "Sun path")
        drawn = [z for z in path.z if z is not None]
        daylight = [p for p in result.sun_path if p.elevation_deg >= 0]
        assert len(drawn) == len(daylight)
        assert all(z >= 0 for z in drawn)

    def test_panel_mesh_has_four_corners(self, manual_result):
        panel = _trace(render_plotly_scene(manual_result), "panel")
        assert len(panel.x) == 4
        # Manual pitch 30° facing south: the panel's upper edge leans north
        assert max(panel.z) > manual_result.state.geometry.mast_height_m

    def test_ground_tint_follows_albedo(self, result):
        assert ground_color(0.45) == "hsl(150, 30%, 22%)"
        ground = _trace(render_plotly_scene(result), "ground")
        assert all(stop[1] == ground_color(result.state.albedo) for stop in ground.colorscale)

    def test_french_trace_names(self, result):
        names = {tr.name for tr in render_plotly_scene(result, lang="fr").data}
        assert "Soleil" in names


class TestStaticScene:
    def test_render(self, result):
        fig = render_static_scene(result, chart_size=4)
        assert isinstance(fig, Figure)
        plt.close(fig)

    def test_save_png(self, result, tmp_path):
        out = save_static_scene(result, tmp_path / "nested" / "scene.png")
        assert out.exists()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_default_path(self, result, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        out = save_static_scene(result)
        assert out == tmp_path / "results" / "solar_2024_06_21_1300.png"
        assert out.exists()

    def test_all_night_day(self, observe, tmp_path):
        polar_night = observe(78.2, 15.6, 1.0, date(2024, 12, 21), 12)
        night = run(SimulatorState(observation=polar_night), sun_path_step_minutes=60)
        assert all(p.elevation_deg < 0 for p in night.sun_path)
        out = save_static_scene(night, tmp_path / "night.png")
        assert out.exists()
        assert np.isfinite(night.metrics.efficiency)
