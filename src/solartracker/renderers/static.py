"""Matplotlib static PNG renderer."""

import colorsys
from pathlib import Path

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from solartracker.models import SimulationResult
from solartracker.orientation import panel_corners
from solartracker.renderers.summary import metric_rows

SUN_DISTANCE = 20.0
GROUND_SIZE = 20.0


def _ground_rgb(albedo: float) -> tuple[float, float, float]:
    """hsl(150, 30%, 50·albedo%) as an RGB tuple."""
    return colorsys.hls_to_rgb(150.0 / 360.0, 0.5 * albedo, 0.3)


def _xyz(points: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Y-up model points → matplotlib (east, north, up)."""
    pts = np.atleast_2d(points)
    return pts[:, 0], pts[:, 2], pts[:, 1]


def render_static_scene(
    result: SimulationResult, chart_size: int = 8, lang: str = "fr"
) -> Figure:
    """Render a SimulationResult as a static matplotlib 3D image.

    Args:
        result: Fully computed simulation state.
        chart_size: Output image size in inches.
        lang: Language code for the metrics caption.

    Returns:
        matplotlib Figure object.
    """
    fig = plt.figure(figsize=(chart_size, chart_size))
    ax = fig.add_subplot(projection="3d")
    fig.patch.set_facecolor("#0b1220")
    ax.set_facecolor("#0b1220")

    half = GROUND_SIZE / 2.0
    ground = np.array(
        [[-half, 0.0, -half], [half, 0.0, -half], [half, 0.0, half], [-half, 0.0, half]]
    )
    gx, gy, gz = _xyz(ground)
    ax.add_collection3d(
        Poly3DCollection(
            [list(zip(gx, gy, gz))],
            facecolor=mcolors.to_hex(_ground_rgb(result.state.albedo)),
            alpha=0.9,
        )
    )

    geometry = result.state.geometry
    ax.plot([0, 0], [0, 0], [0, geometry.mast_height_m], color="#4b5563", linewidth=4)

    corners = panel_corners(result.pose, geometry)
    px, py, pz = _xyz(corners)
    ax.add_collection3d(
        Poly3DCollection(
            [list(zip(px, py, pz))],
            facecolor="#1d4ed8",
            edgecolor="#0f172a",
            linewidths=1.5,
        )
    )

    center = np.array([0.0, geometry.mast_height_m, 0.0])
    tip = center + np.array(result.pose.normal) * 1.5
    nx, ny, nz = _xyz(np.vstack([center, tip]))
    ax.plot(nx, ny, nz, color="#38bdf8", linewidth=2)

    path = np.array(
        [p.direction for p in result.sun_path if p.elevation_deg >= 0]
    ).reshape(-1, 3)
    if len(path):
        sx, sy, sz = _xyz(path * SUN_DISTANCE)
        ax.plot(sx, sy, sz, color="#fde047", linewidth=1, linestyle=":")

    sun_point = np.array(result.sun.direction) * SUN_DISTANCE
    rx, ry, rz = _xyz(np.vstack([center, sun_point]))
    ax.plot(rx, ry, rz, color="#facc15", linewidth=1, alpha=0.5)
    ax.scatter(rx[1:], ry[1:], rz[1:], s=220, color="#facc15", depthshade=False)

    compass = [("N", 0.0, half), ("E", half, 0.0), ("S", 0.0, -half), ("W", -half, 0.0)]
    for label, lx, ly in compass:
        ax.text(lx * 1.1, ly * 1.1, 0.0, label, color="#e5e7eb")

    ax.set_xlim(-SUN_DISTANCE, SUN_DISTANCE)
    ax.set_ylim(-SUN_DISTANCE, SUN_DISTANCE)
    ax.set_zlim(-1.0, SUN_DISTANCE)
    ax.set_box_aspect((2 * SUN_DISTANCE, 2 * SUN_DISTANCE, SUN_DISTANCE + 1.0))
    ax.view_init(elev=20, azim=-60)
    ax.axis("off")

    rows = metric_rows(result, lang)
    caption = "   ".join(f"{label}: {value}" for label, value in rows)
    fig.text(0.5, 0.04, caption, ha="center", color="#e5e7eb", fontsize=10)

    return fig


def save_static_scene(
    result: SimulationResult, output_path: Path | None = None, lang: str = "fr"
) -> Path:
    """Save a SimulationResult as a PNG file.

    Args:
        result: Fully computed simulation state.
        output_path: Destination path. Auto-generated under results/ if None.
        lang: Language code for the metrics caption.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        obs = result.state.observation
        stamp = f"{obs.local_date:%Y_%m_%d}_{obs.local_time:%H%M}"
        output_path = Path.cwd() / "results" / f"solar_{stamp}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_scene(result, lang=lang)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
