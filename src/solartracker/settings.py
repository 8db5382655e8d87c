"""Environment-driven defaults.

Values come from ``os.environ``; entry points call ``load_dotenv()`` first so a
local ``.env`` file can supply them.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_LANGS = ("fr", "en")


@dataclass(frozen=True)
class Settings:
    latitude: float = 48.8566  # Paris
    longitude: float = 2.3522
    utc_offset: float = 1.0  # Used when the browser offset is unavailable
    lang: str = "fr"
    sun_path_step_minutes: int = 15
    log_level: str = "INFO"


def _env_float(name: str, default: float, lo: float, hi: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number, using {default}")
        return default
    if not lo <= value <= hi:
        logger.warning(f"{name}={value} outside [{lo}, {hi}], using {default}")
        return default
    return value


def load_settings() -> Settings:
    """Read SOLARTRACKER_* variables, falling back to defaults on bad values."""
    defaults = Settings()

    lang = os.environ.get("SOLARTRACKER_LANG", defaults.lang).strip().lower()
    if lang not in _LANGS:
        logger.warning(f"SOLARTRACKER_LANG={lang!r} unsupported, using {defaults.lang}")
        lang = defaults.lang

    step = int(
        _env_float(
            "SOLARTRACKER_SUN_PATH_STEP", defaults.sun_path_step_minutes, 1, 240
        )
    )

    level = os.environ.get("SOLARTRACKER_LOG_LEVEL", defaults.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"SOLARTRACKER_LOG_LEVEL={level!r} unknown, using INFO")
        level = defaults.log_level

    return Settings(
        latitude=_env_float("SOLARTRACKER_LATITUDE", defaults.latitude, -90, 90),
        longitude=_env_float("SOLARTRACKER_LONGITUDE", defaults.longitude, -180, 180),
        utc_offset=_env_float("SOLARTRACKER_UTC_OFFSET", defaults.utc_offset, -12, 14),
        lang=lang,
        sun_path_step_minutes=step,
        log_level=level,
    )


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger. Entry points only."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
