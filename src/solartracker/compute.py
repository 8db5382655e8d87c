"""Compute layer — input validation and the sun → panel → metrics pipeline."""

import logging
import math
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone

from solartracker.ephemeris import compute_ephemeris, compute_sun_position
from solartracker.models import (
    FormInput,
    ObservationInput,
    PanelGeometry,
    SimulationResult,
    SimulatorState,
    SunPathPoint,
    TrackingMode,
)
from solartracker.orientation import compute_incidence_metrics, compute_panel_pose
from solartracker.settings import Settings

logger = logging.getLogger(__name__)

MIN_PANEL_DIMENSION_M = 0.5
ALBEDO_RANGE = (0.1, 0.9)
UTC_OFFSET_RANGE = (-12.0, 14.0)


class InputError(Exception):
    """User input rejected before reaching the ephemeris."""


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InputError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def _parse_time(value: str) -> time:
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    raise InputError(f"Invalid time: {value!r} (expected HH:MM)")


def _check_range(name: str, value: float, lo: float, hi: float) -> float:
    if not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {value}")
    if not lo <= value <= hi:
        raise InputError(f"{name} must be between {lo:g} and {hi:g}, got {value:g}")
    return float(value)


def _check_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {value}")
    return float(value)


def parse_form(form: FormInput) -> SimulatorState:
    """Validate a raw UI snapshot into a SimulatorState.

    Manual pitch/yaw are only checked for finiteness; range handling
    (clamp/normalize) happens when the panel pose is built.

    Raises:
        InputError: On unparseable date/time or out-of-range values.
    """
    try:
        mode = TrackingMode(form.tracking_mode)
    except ValueError:
        raise InputError(f"Unknown tracking mode: {form.tracking_mode!r}") from None

    observation = ObservationInput(
        latitude=_check_range("Latitude", form.latitude, -90.0, 90.0),
        longitude=_check_range("Longitude", form.longitude, -180.0, 180.0),
        utc_offset_hours=_check_range("UTC offset", form.utc_offset, *UTC_OFFSET_RANGE),
        local_date=_parse_date(form.date),
        local_time=_parse_time(form.time),
    )

    geometry = PanelGeometry(
        width_m=_check_range("Panel width", form.panel_width, MIN_PANEL_DIMENSION_M, math.inf),
        height_m=_check_range("Panel height", form.panel_height, MIN_PANEL_DIMENSION_M, math.inf),
        mast_height_m=_check_range("Mast height", form.mast_height, MIN_PANEL_DIMENSION_M, math.inf),
    )

    return SimulatorState(
        observation=observation,
        tracking_mode=mode,
        manual_pitch=_check_finite("Manual pitch", form.manual_pitch),
        manual_yaw=_check_finite("Manual yaw", form.manual_yaw),
        geometry=geometry,
        albedo=_check_range("Albedo", form.albedo, *ALBEDO_RANGE),
    )


def default_form(
    settings: Settings, now: datetime, utc_offset: float | None = None
) -> FormInput:
    """Initial UI snapshot: configured site, the given clock reading, auto tracking.

    Args:
        settings: Loaded settings (site and fallback offset).
        now: Clock reading for the date/time fields. An aware datetime is
            converted to civil time at the form's offset; a naive one is
            taken as already being at that offset.
        utc_offset: Browser-reported offset in hours; settings value if None.
    """
    offset = settings.utc_offset if utc_offset is None else utc_offset
    lo, hi = UTC_OFFSET_RANGE
    # Out-of-range offsets pass through for parse_form to reject
    if now.tzinfo is not None and lo <= offset <= hi:
        now = now.astimezone(timezone(timedelta(hours=offset)))
    return FormInput(
        latitude=settings.latitude,
        longitude=settings.longitude,
        utc_offset=offset,
        date=now.strftime("%Y-%m-%d"),
        time=now.strftime("%H:%M"),
    )


def compute_sun_path(
    observation: ObservationInput, step_minutes: int = 15
) -> tuple[SunPathPoint, ...]:
    """Sample the sun across the observation's local date.

    Samples run from 00:00 to 23:59 local time every ``step_minutes``.
    """
    if step_minutes < 1:
        raise ValueError(f"step_minutes must be >= 1, got {step_minutes}")
    points: list[SunPathPoint] = []
    for minutes in range(0, 1440, step_minutes):
        sample = replace(observation, local_time=time(minutes // 60, minutes % 60))
        pos = compute_sun_position(sample)
        points.append(
            SunPathPoint(
                minutes=minutes,
                azimuth_deg=pos.azimuth_deg,
                elevation_deg=pos.elevation_deg,
                direction=pos.direction,
            )
        )
    return tuple(points)


def run(state: SimulatorState, sun_path_step_minutes: int = 15) -> SimulationResult:
    """Top-level entry point: derive the full result chain for one input snapshot.

    Args:
        state: Validated simulator state.
        sun_path_step_minutes: Sampling interval of the daily sun path.

    Returns:
        Fully computed SimulationResult.
    """
    sun, terms = compute_ephemeris(state.observation)
    pose = compute_panel_pose(
        state.tracking_mode, sun, state.manual_pitch, state.manual_yaw
    )
    metrics = compute_incidence_metrics(sun.direction, pose.normal)
    sun_path = compute_sun_path(state.observation, sun_path_step_minutes)

    logger.info(
        f"{state.tracking_mode} run at ({state.observation.latitude:.4f}, "
        f"{state.observation.longitude:.4f}): sun az={sun.azimuth_deg:.1f} "
        f"el={sun.elevation_deg:.1f}, incidence={metrics.incidence_angle_deg:.1f}, "
        f"efficiency={metrics.efficiency:.2f}"
    )
    return SimulationResult(
        state=state,
        sun=sun,
        terms=terms,
        pose=pose,
        metrics=metrics,
        sun_path=sun_path,
    )


def run_form(form: FormInput, sun_path_step_minutes: int = 15) -> SimulationResult:
    """Validate a raw form and run the pipeline.

    Raises:
        InputError: When the form fails validation.
    """
    return run(parse_form(form), sun_path_step_minutes)
