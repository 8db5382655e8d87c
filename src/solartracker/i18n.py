"""Simple two-language (fr/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "fr": "Suivi Solaire Biaxial",
        "en": "Dual-Axis Solar Tracker",
    },
    "intro": {
        "fr": "Ajustez les paramètres pour simuler un système de pilotage de panneaux solaires.",
        "en": "Adjust the parameters to simulate a solar panel steering system.",
    },
    "section_site": {
        "fr": "Site et horaire",
        "en": "Site and time",
    },
    "section_panel": {
        "fr": "Panneau",
        "en": "Panel",
    },
    "label_latitude": {
        "fr": "Latitude (°)",
        "en": "Latitude (°)",
    },
    "label_longitude": {
        "fr": "Longitude (°)",
        "en": "Longitude (°)",
    },
    "label_utc_offset": {
        "fr": "Offset UTC (h)",
        "en": "UTC offset (h)",
    },
    "label_date": {
        "fr": "Date",
        "en": "Date",
    },
    "label_time": {
        "fr": "Heure",
        "en": "Time",
    },
    "label_albedo": {
        "fr": "Albedo sol",
        "en": "Ground albedo",
    },
    "label_mode": {
        "fr": "Mode de pilotage",
        "en": "Tracking mode",
    },
    "mode_auto": {
        "fr": "Automatique",
        "en": "Automatic",
    },
    "mode_manual": {
        "fr": "Manuel",
        "en": "Manual",
    },
    "label_width": {
        "fr": "Largeur panneau (m)",
        "en": "Panel width (m)",
    },
    "label_height": {
        "fr": "Hauteur panneau (m)",
        "en": "Panel height (m)",
    },
    "label_mast": {
        "fr": "Hauteur mât (m)",
        "en": "Mast height (m)",
    },
    "label_yaw": {
        "fr": "Yaw manuel (°)",
        "en": "Manual yaw (°)",
    },
    "label_pitch": {
        "fr": "Inclinaison (°)",
        "en": "Tilt (°)",
    },
    "metrics_title": {
        "fr": "Indicateurs instantanés",
        "en": "Instant metrics",
    },
    "metric_azimuth": {
        "fr": "Azimut solaire",
        "en": "Solar azimuth",
    },
    "metric_elevation": {
        "fr": "Hauteur solaire",
        "en": "Solar elevation",
    },
    "metric_incidence": {
        "fr": "Angle d'incidence",
        "en": "Incidence angle",
    },
    "metric_flux": {
        "fr": "Flux capté",
        "en": "Captured flux",
    },
    "flux_caption": {
        "fr": "Indicateur en cosinus de l'angle d'incidence, pas une irradiance en W/m².",
        "en": "Cosine of the incidence angle, not an irradiance in W/m².",
    },
    "error_input": {
        "fr": "Paramètres invalides : {error}",
        "en": "Invalid parameters: {error}",
    },
    "legend_sun": {
        "fr": "Soleil",
        "en": "Sun",
    },
    "legend_path": {
        "fr": "Course du soleil",
        "en": "Sun path",
    },
    "legend_normal": {
        "fr": "Normale du panneau",
        "en": "Panel normal",
    },
    "legend_ray": {
        "fr": "Rayon solaire",
        "en": "Sun ray",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
