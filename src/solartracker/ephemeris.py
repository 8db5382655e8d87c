"""Solar ephemeris — NOAA geometric-mean solar position algorithm.

Maps an observer location and a local civil date/time at a fixed UTC offset
to the sun's azimuth, elevation and unit direction vector.

All trigonometry runs in radians; every public angle is in degrees.
Direction vectors use the renderer frame: x = east, y = up, z = north.
"""

import logging
import math

import numpy as np

from solartracker.models import EphemerisTerms, ObservationInput, SunPosition, Vector3

logger = logging.getLogger(__name__)

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
MINUTES_PER_DAY = 1440.0

# Below-horizon floor so the sun stays drawable around sunrise/sunset
ELEVATION_FLOOR_DEG = -5.0
# |cos(lat)·sin(zenith)| at or below this makes the azimuth undefined
AZIMUTH_DEGENERACY_EPS = 0.001


def normalize_angle(angle: float) -> float:
    """Normalize angle to the [0, 360) degree range."""
    normalized = angle % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if normalized >= 360.0 else normalized


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def julian_day_number(year: int, month: int, day: int) -> int:
    """Gregorian calendar date to Julian Day Number (integer, noon-based).

    January and February are counted as months 13 and 14 of the prior year.
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def julian_day(observation: ObservationInput) -> float:
    """Fractional Julian Day of the observation, shifted from local time to UTC."""
    d = observation.local_date
    t = observation.local_time
    hours = t.hour + t.minute / 60.0 + t.second / 3600.0
    return (
        julian_day_number(d.year, d.month, d.day)
        + (hours - observation.utc_offset_hours) / 24.0
        - 0.5
    )


def julian_century(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY


def geom_mean_long_sun(t: float) -> float:
    """Geometric mean longitude of the sun (degrees, [0, 360))."""
    return normalize_angle(280.46646 + t * (36000.76983 + 0.0003032 * t))


def geom_mean_anom_sun(t: float) -> float:
    """Geometric mean anomaly of the sun (degrees, unwrapped)."""
    return 357.52911 + t * (35999.05029 - 0.0001537 * t)


def eccent_earth_orbit(t: float) -> float:
    return 0.016708634 - t * (0.000042037 + 0.0000001267 * t)


def sun_eq_of_center(t: float, anomaly: float) -> float:
    m = math.radians(anomaly)
    return (
        math.sin(m) * (1.914602 - t * (0.004817 + 0.000014 * t))
        + math.sin(2 * m) * (0.019993 - 0.000101 * t)
        + math.sin(3 * m) * 0.000289
    )


def _omega(t: float) -> float:
    """Longitude of the moon's ascending node (degrees), drives nutation terms."""
    return 125.04 - 1934.136 * t


def sun_app_long(t: float, true_long: float) -> float:
    """Apparent longitude: true longitude corrected for nutation and aberration."""
    return true_long - 0.00569 - 0.00478 * math.sin(math.radians(_omega(t)))


def mean_obliq_ecliptic(t: float) -> float:
    arcsec = 21.448 - t * (46.815 + t * (0.00059 - t * 0.001813))
    return 23.0 + (26.0 + arcsec / 60.0) / 60.0


def obliq_corr(t: float) -> float:
    return mean_obliq_ecliptic(t) + 0.00256 * math.cos(math.radians(_omega(t)))


def sun_declination(obliquity: float, app_long: float) -> float:
    s = math.sin(math.radians(obliquity)) * math.sin(math.radians(app_long))
    return math.degrees(math.asin(clamp(s, -1.0, 1.0)))


def equation_of_time(
    obliquity: float, mean_long: float, anomaly: float, eccent: float
) -> float:
    """Equation of time in minutes (true solar time minus mean solar time)."""
    var_y = math.tan(math.radians(obliquity / 2.0)) ** 2
    l0 = math.radians(mean_long)
    m = math.radians(anomaly)
    e = eccent
    return 4.0 * math.degrees(
        var_y * math.sin(2 * l0)
        - 2 * e * math.sin(m)
        + 4 * e * var_y * math.sin(m) * math.cos(2 * l0)
        - 0.5 * var_y * var_y * math.sin(4 * l0)
        - 1.25 * e * e * math.sin(2 * m)
    )


def true_solar_time(
    observation: ObservationInput, eq_of_time: float
) -> float:
    """True solar time in minutes, wrapped into [0, 1440)."""
    t = observation.local_time
    total_minutes = t.hour * 60 + t.minute + t.second / 60.0
    tst = (
        total_minutes
        + eq_of_time
        + 4.0 * observation.longitude
        - 60.0 * observation.utc_offset_hours
    )
    return tst % MINUTES_PER_DAY


def hour_angle(tst_minutes: float) -> float:
    """Hour angle in degrees: 0 at solar noon, negative before, positive after."""
    ha = tst_minutes / 4.0 - 180.0
    if ha < -180.0:
        ha += 360.0
    return ha


def solar_zenith(latitude: float, declination: float, ha: float) -> float:
    """Zenith angle (degrees) via the spherical law of cosines."""
    lat = math.radians(latitude)
    dec = math.radians(declination)
    cos_zenith = math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(
        dec
    ) * math.cos(math.radians(ha))
    # Clamp to [-1, 1] to handle floating point errors
    return math.degrees(math.acos(clamp(cos_zenith, -1.0, 1.0)))


def solar_azimuth(
    latitude: float, declination: float, ha: float, zenith: float
) -> float:
    """Azimuth in degrees clockwise from north, [0, 360).

    Returns 0 when the sun sits at the zenith/nadir or the observer at a pole,
    where the bearing is undefined.
    """
    lat = math.radians(latitude)
    dec = math.radians(declination)
    z = math.radians(zenith)
    denominator = math.cos(lat) * math.sin(z)
    if abs(denominator) <= AZIMUTH_DEGENERACY_EPS:
        return 0.0
    ratio = (math.sin(lat) * math.cos(z) - math.sin(dec)) / denominator
    # Angle from due south, measured toward the side the sun is on
    from_south = math.degrees(math.acos(clamp(ratio, -1.0, 1.0)))
    if math.sin(math.radians(ha)) > 0:
        return normalize_angle(180.0 + from_south)
    return normalize_angle(180.0 - from_south)


def direction_vector(azimuth_deg: float, elevation_deg: float) -> Vector3:
    """Spherical (azimuth, elevation) to a unit vector: x=east, y=up, z=north."""
    az = math.radians(azimuth_deg)
    el = math.radians(elevation_deg)
    v = np.array(
        [math.sin(az) * math.cos(el), math.sin(el), math.cos(az) * math.cos(el)]
    )
    v = v / np.linalg.norm(v)
    return (float(v[0]), float(v[1]), float(v[2]))


def compute_ephemeris(
    observation: ObservationInput,
) -> tuple[SunPosition, EphemerisTerms]:
    """Run the full NOAA chain and return the sun position with its intermediates.

    Args:
        observation: Location and local civil date/time. Date and time must
            already be valid; validation belongs to the caller.

    Returns:
        (SunPosition, EphemerisTerms). The position's elevation is clamped to
        a floor of -5°; the terms keep the raw elevation.
    """
    jd = julian_day(observation)
    t = julian_century(jd)

    mean_long = geom_mean_long_sun(t)
    anomaly = geom_mean_anom_sun(t)
    eccent = eccent_earth_orbit(t)
    true_long = mean_long + sun_eq_of_center(t, anomaly)
    app_long = sun_app_long(t, true_long)
    obliquity = obliq_corr(t)
    declination = sun_declination(obliquity, app_long)
    eot = equation_of_time(obliquity, mean_long, anomaly, eccent)

    tst = true_solar_time(observation, eot)
    ha = hour_angle(tst)
    zenith = solar_zenith(observation.latitude, declination, ha)
    raw_elevation = 90.0 - zenith
    azimuth = solar_azimuth(observation.latitude, declination, ha, zenith)

    elevation = max(raw_elevation, ELEVATION_FLOOR_DEG)
    sun = SunPosition(
        azimuth_deg=azimuth,
        elevation_deg=elevation,
        direction=direction_vector(azimuth, elevation),
    )
    terms = EphemerisTerms(
        julian_day=jd,
        julian_century=t,
        declination_deg=declination,
        equation_of_time_min=eot,
        true_solar_time_min=tst,
        hour_angle_deg=ha,
        zenith_deg=zenith,
        raw_elevation_deg=raw_elevation,
    )
    logger.debug(
        f"Sun at {observation.local_date} {observation.local_time} "
        f"(UTC{observation.utc_offset_hours:+g}): az={azimuth:.2f} el={elevation:.2f}"
    )
    return sun, terms


def compute_sun_position(observation: ObservationInput) -> SunPosition:
    """Sun azimuth, elevation and direction for an observation."""
    return compute_ephemeris(observation)[0]
