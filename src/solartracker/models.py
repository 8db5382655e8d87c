"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import date, time
from enum import StrEnum

Vector3 = tuple[float, float, float]


class TrackingMode(StrEnum):
    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True)
class FormInput:
    """Raw UI snapshot. Not yet validated."""

    latitude: float
    longitude: float
    utc_offset: float  # Hours east of UTC
    date: str  # "YYYY-MM-DD"
    time: str  # "HH:MM" or "HH:MM:SS"
    tracking_mode: str = "auto"
    manual_pitch: float = 30.0
    manual_yaw: float = 180.0
    panel_width: float = 2.0
    panel_height: float = 1.2
    mast_height: float = 1.2
    albedo: float = 0.45


@dataclass(frozen=True)
class ObservationInput:
    """Observer location and local civil time at a fixed UTC offset."""

    latitude: float  # Degrees, [-90, 90]
    longitude: float  # Degrees, [-180, 180], east positive
    utc_offset_hours: float
    local_date: date
    local_time: time  # Local civil time at utc_offset_hours, not the machine's zone


@dataclass(frozen=True)
class PanelGeometry:
    """Physical panel dimensions in metres. Only used for drawing."""

    width_m: float = 2.0
    height_m: float = 1.2
    mast_height_m: float = 1.2


@dataclass(frozen=True)
class SimulatorState:
    """Validated input snapshot. Input to the compute pipeline."""

    observation: ObservationInput
    tracking_mode: TrackingMode = TrackingMode.AUTO
    manual_pitch: float = 30.0
    manual_yaw: float = 180.0
    geometry: PanelGeometry = PanelGeometry()
    albedo: float = 0.45  # Ground reflectance, drawing only


@dataclass(frozen=True)
class SunPosition:
    """Apparent sun position for one observation."""

    azimuth_deg: float  # [0, 360), clockwise from north
    elevation_deg: float  # [-5, 90], floor-clamped
    direction: Vector3  # Unit vector, Y-up: x=east, y=up, z=north


@dataclass(frozen=True)
class EphemerisTerms:
    """Intermediate quantities of a single ephemeris evaluation."""

    julian_day: float
    julian_century: float
    declination_deg: float
    equation_of_time_min: float
    true_solar_time_min: float  # [0, 1440)
    hour_angle_deg: float  # 0 at solar noon, negative in the morning
    zenith_deg: float
    raw_elevation_deg: float  # Before the -5° floor


@dataclass(frozen=True)
class PanelPose:
    """Panel orientation. pitch = tilt of the normal above the horizon."""

    pitch_deg: float  # [0, 90]
    yaw_deg: float  # [0, 360)
    normal: Vector3  # Unit vector, same frame as SunPosition.direction


@dataclass(frozen=True)
class IncidenceMetrics:
    """Cosine-law proxy, not a calibrated irradiance (W/m²)."""

    incidence_angle_deg: float  # [0, 180]
    efficiency: float  # [0, 1]


@dataclass(frozen=True)
class SunPathPoint:
    """One sample of the sun's track across the local day."""

    minutes: int  # Local minutes since midnight
    azimuth_deg: float
    elevation_deg: float
    direction: Vector3


@dataclass(frozen=True)
class SimulationResult:
    """The sole input to renderers. Fully computed state."""

    state: SimulatorState
    sun: SunPosition
    terms: EphemerisTerms
    pose: PanelPose
    metrics: IncidenceMetrics
    sun_path: tuple[SunPathPoint, ...]
