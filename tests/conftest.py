from datetime import date, time

import matplotlib
import pytest

matplotlib.use("Agg")

from solartracker.models import ObservationInput  # noqa: E402


@pytest.fixture
def paris_solstice() -> ObservationInput:
    return ObservationInput(
        latitude=48.8566,
        longitude=2.3522,
        utc_offset_hours=1.0,
        local_date=date(2024, 6, 21),
        local_time=time(13, 0),
    )


@pytest.fixture
def observe():
    """Factory: observe(lat, lon, offset, date, hh, mm=0, ss=0)."""

    def _observe(lat, lon, offset, day, hh, mm=0, ss=0) -> ObservationInput:
        return ObservationInput(
            latitude=lat,
            longitude=lon,
            utc_offset_hours=offset,
            local_date=day,
            local_time=time(hh, mm, ss),
        )

    return _observe
