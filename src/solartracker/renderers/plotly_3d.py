"""Plotly 3D interactive tracker scene renderer.

Model frame is Y-up (x=east, y=up, z=north); Plotly scenes are Z-up, so
every point is drawn as (x, z, y): east, north, up.
Supports orbit, zoom and pan through Plotly's scene camera.
"""

import numpy as np
import plotly.graph_objects as go

from solartracker.i18n import t
from solartracker.models import SimulationResult
from solartracker.orientation import panel_corners

_BG = "#0b1220"
_SUN_COLOR = "#facc15"
_PANEL_COLOR = "#1d4ed8"
_FRAME_COLOR = "#0f172a"
_MAST_COLOR = "#4b5563"
_PATH_COLOR = "#fde047"
_NORMAL_COLOR = "#38bdf8"
_GRID_COLOR = "#1f2937"

SUN_DISTANCE = 20.0
GROUND_SIZE = 20.0
NORMAL_LENGTH = 1.5


def ground_color(albedo: float) -> str:
    """Ground tint: darker soil for low albedo, lighter for high."""
    return f"hsl(150, 30%, {50 * albedo:.0f}%)"


def _to_scene(points: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Y-up model points (N×3) → Plotly (x, y, z) columns."""
    pts = np.atleast_2d(points)
    return pts[:, 0], pts[:, 2], pts[:, 1]


def _sun_path_trace(result: SimulationResult, lang: str) -> go.Scatter3d:
    # Below-horizon samples break the line with None separators
    xs: list[float | None] = []
    ys: list[float | None] = []
    zs: list[float | None] = []
    for point in result.sun_path:
        if point.elevation_deg < 0:
            if xs and xs[-1] is not None:
                xs.append(None)
                ys.append(None)
                zs.append(None)
            continue
        x, y, z = (c * SUN_DISTANCE for c in point.direction)
        xs.append(x)
        ys.append(z)
        zs.append(y)
    return go.Scatter3d(
        x=xs,
        y=ys,
        z=zs,
        mode="lines",
        line=dict(color=_PATH_COLOR, width=2, dash="dot"),
        hoverinfo="skip",
        name=t("legend_path", lang),
    )


def render_plotly_scene(result: SimulationResult, lang: str = "fr") -> go.Figure:
    """Render a SimulationResult as a Plotly 3D scene.

    Draws the ground (tinted by albedo), the mast, the panel rectangle
    posed by pitch/yaw, the sun at a fixed distance, the sun ray to the
    panel centre, the panel normal and the day's sun path above the horizon.

    Args:
        result: Fully computed simulation state.
        lang: Language code ('fr' or 'en') for trace names.

    Returns:
        Plotly Figure object.
    """
    geometry = result.state.geometry
    center = np.array([0.0, geometry.mast_height_m, 0.0])
    sun_point = np.array(result.sun.direction) * SUN_DISTANCE
    normal_tip = center + np.array(result.pose.normal) * NORMAL_LENGTH

    half = GROUND_SIZE / 2.0
    ground_color_str = ground_color(result.state.albedo)
    ground = go.Surface(
        x=[[-half, half], [-half, half]],
        y=[[-half, -half], [half, half]],
        z=[[0.0, 0.0], [0.0, 0.0]],
        surfacecolor=[[0.0, 0.0], [0.0, 0.0]],
        colorscale=[[0.0, ground_color_str], [1.0, ground_color_str]],
        showscale=False,
        hoverinfo="skip",
        name="ground",
    )

    mast = go.Scatter3d(
        x=[0.0, 0.0],
        y=[0.0, 0.0],
        z=[0.0, geometry.mast_height_m],
        mode="lines",
        line=dict(color=_MAST_COLOR, width=10),
        hoverinfo="skip",
        name="mast",
    )

    corners = panel_corners(result.pose, geometry)
    cx, cy, cz = _to_scene(corners)
    panel = go.Mesh3d(
        x=cx,
        y=cy,
        z=cz,
        i=[0, 0],
        j=[1, 2],
        k=[2, 3],
        color=_PANEL_COLOR,
        opacity=0.95,
        flatshading=True,
        hovertemplate=(
            f"pitch {result.pose.pitch_deg:.1f}°<br>"
            f"yaw {result.pose.yaw_deg:.1f}°<extra></extra>"
        ),
        name="panel",
    )
    closed = np.vstack([corners, corners[:1]])
    fx, fy, fz = _to_scene(closed)
    frame = go.Scatter3d(
        x=fx,
        y=fy,
        z=fz,
        mode="lines",
        line=dict(color=_FRAME_COLOR, width=6),
        hoverinfo="skip",
        name="frame",
    )

    sx, sy, sz = _to_scene(sun_point)
    sun = go.Scatter3d(
        x=sx,
        y=sy,
        z=sz,
        mode="markers",
        marker=dict(size=14, color=_SUN_COLOR, line=dict(width=0)),
        hovertemplate=(
            f"az {result.sun.azimuth_deg:.1f}°<br>"
            f"el {result.sun.elevation_deg:.1f}°<extra></extra>"
        ),
        name=t("legend_sun", lang),
    )

    rx, ry, rz = _to_scene(np.vstack([center, sun_point]))
    ray = go.Scatter3d(
        x=rx,
        y=ry,
        z=rz,
        mode="lines",
        line=dict(color=_SUN_COLOR, width=2),
        opacity=0.5,
        hoverinfo="skip",
        name=t("legend_ray", lang),
    )

    nx, ny, nz = _to_scene(np.vstack([center, normal_tip]))
    normal = go.Scatter3d(
        x=nx,
        y=ny,
        z=nz,
        mode="lines",
        line=dict(color=_NORMAL_COLOR, width=5),
        hoverinfo="skip",
        name=t("legend_normal", lang),
    )
    # Arrow head on the normal
    ux, uy, uz = _to_scene(np.array(result.pose.normal))
    head = go.Cone(
        x=[nx[1]],
        y=[ny[1]],
        z=[nz[1]],
        u=ux,
        v=uy,
        w=uz,
        sizemode="absolute",
        sizeref=0.3,
        anchor="tail",
        colorscale=[[0.0, _NORMAL_COLOR], [1.0, _NORMAL_COLOR]],
        showscale=False,
        hoverinfo="skip",
        name="normal_head",
    )

    label_r = half * 1.1
    compass = go.Scatter3d(
        x=[0.0, label_r, 0.0, -label_r],
        y=[label_r, 0.0, -label_r, 0.0],
        z=[0.0, 0.0, 0.0, 0.0],
        mode="text",
        text=["N", "E", "S", "W"],
        textfont=dict(color="#e5e7eb", size=14),
        hoverinfo="skip",
        name="compass",
    )

    fig = go.Figure(
        data=[
            ground,
            mast,
            panel,
            frame,
            normal,
            head,
            ray,
            _sun_path_trace(result, lang),
            sun,
            compass,
        ]
    )

    axis = dict(
        visible=False,
        showgrid=True,
        gridcolor=_GRID_COLOR,
        zeroline=False,
    )
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=640,
        scene=dict(
            xaxis=dict(axis, range=[-SUN_DISTANCE, SUN_DISTANCE]),
            yaxis=dict(axis, range=[-SUN_DISTANCE, SUN_DISTANCE]),
            zaxis=dict(axis, range=[-1.0, SUN_DISTANCE]),
            aspectmode="manual",
            aspectratio=dict(x=1.0, y=1.0, z=0.525),
            camera=dict(eye=dict(x=0.9, y=-1.1, z=0.45)),
            bgcolor=_BG,
        ),
    )
    return fig
