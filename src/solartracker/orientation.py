"""Panel orientation and incidence metrics for a dual-axis tracker."""

import math

import numpy as np

from solartracker.ephemeris import clamp, direction_vector, normalize_angle
from solartracker.models import (
    IncidenceMetrics,
    PanelGeometry,
    PanelPose,
    SunPosition,
    TrackingMode,
    Vector3,
)

PITCH_MIN_DEG = 0.0
PITCH_MAX_DEG = 90.0


def compute_panel_pose(
    tracking_mode: TrackingMode,
    sun: SunPosition,
    manual_pitch: float,
    manual_yaw: float,
) -> PanelPose:
    """Orient the panel normal.

    Pitch is the elevation of the normal: 0 stands the panel upright facing
    the horizon, 90 lays it flat facing the sky. Auto mode points the normal
    at the sun with no actuator lag; a sun below the horizon (down to the
    -5° floor) is clamped to pitch 0 like any manual request. Manual mode
    uses the user's pitch/yaw and ignores the sun entirely.

    Args:
        tracking_mode: AUTO or MANUAL.
        sun: Current sun position.
        manual_pitch: Requested tilt above horizontal (degrees), clamped to [0, 90].
        manual_yaw: Requested bearing (degrees), normalized to [0, 360).

    Returns:
        PanelPose with the unit normal in the SunPosition.direction frame.
    """
    if tracking_mode is TrackingMode.AUTO:
        pitch, yaw = sun.elevation_deg, sun.azimuth_deg
    else:
        pitch, yaw = manual_pitch, manual_yaw

    pitch = clamp(pitch, PITCH_MIN_DEG, PITCH_MAX_DEG)
    yaw = normalize_angle(yaw)
    return PanelPose(pitch_deg=pitch, yaw_deg=yaw, normal=direction_vector(yaw, pitch))


def compute_incidence_metrics(
    sun_direction: Vector3, panel_normal: Vector3
) -> IncidenceMetrics:
    """Angle between the sun ray and the panel normal, plus the cosine-law proxy.

    The efficiency is max(0, cos(incidence)): zero once the sun is behind the
    panel plane.
    """
    cos_angle = clamp(float(np.dot(sun_direction, panel_normal)), -1.0, 1.0)
    angle = math.acos(cos_angle)
    return IncidenceMetrics(
        incidence_angle_deg=math.degrees(angle),
        efficiency=max(0.0, math.cos(angle)),
    )


def panel_corners(pose: PanelPose, geometry: PanelGeometry) -> np.ndarray:
    """Corner points (4×3, x=east, y=up, z=north) of the panel on top of its mast.

    The width edge stays horizontal; the height edge tilts with the pitch.
    Corners are ordered around the rectangle.
    """
    yaw = math.radians(pose.yaw_deg)
    pitch = math.radians(pose.pitch_deg)
    center = np.array([0.0, geometry.mast_height_m, 0.0])
    across = np.array([math.cos(yaw), 0.0, -math.sin(yaw)])
    up = np.array(
        [
            -math.sin(pitch) * math.sin(yaw),
            math.cos(pitch),
            -math.sin(pitch) * math.cos(yaw),
        ]
    )
    half_w = across * geometry.width_m / 2.0
    half_h = up * geometry.height_m / 2.0
    return np.array(
        [
            center - half_w - half_h,
            center + half_w - half_h,
            center + half_w + half_h,
            center - half_w + half_h,
        ]
    )
