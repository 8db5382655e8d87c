"""Metrics card: formatted azimuth, elevation, incidence and captured flux."""

from solartracker.i18n import t
from solartracker.models import SimulationResult


def metric_rows(result: SimulationResult, lang: str = "fr") -> list[tuple[str, str]]:
    """Return (label, value) pairs in display order."""
    return [
        (t("metric_azimuth", lang), f"{result.sun.azimuth_deg:.1f}°"),
        (t("metric_elevation", lang), f"{result.sun.elevation_deg:.1f}°"),
        (t("metric_incidence", lang), f"{result.metrics.incidence_angle_deg:.1f}°"),
        (t("metric_flux", lang), f"{result.metrics.efficiency * 100:.0f}%"),
    ]


def render_text_summary(result: SimulationResult, lang: str = "fr") -> str:
    """Plain-text card for terminal output."""
    rows = metric_rows(result, lang)
    width = max(len(label) for label, _ in rows)
    lines = [t("metrics_title", lang)]
    lines += [f"  {label:<{width}}  {value}" for label, value in rows]
    return "\n".join(lines)
