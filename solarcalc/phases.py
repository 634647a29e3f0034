"""Times of solar noon, sunrise, sunset and twilight phases for one day."""

from __future__ import annotations

import json
import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .astro import (
    RAD,
    approx_transit,
    declination,
    ecliptic_longitude,
    from_julian,
    hour_angle,
    hour_angle_cosine,
    julian_cycle,
    observer_angle,
    solar_mean_anomaly,
    solar_transit_j,
    to_days,
)
from .models import RiseSet, RiseSetStatus, SunTimes, Twilight

__all__ = [
    "PHASE_ANGLES",
    "TWILIGHT_PHASES",
    "SunPhase",
    "get_rise_set",
    "get_times",
    "phase_angle",
    "time_at_phase",
]

LOGGER = logging.getLogger(__name__)


class SunPhase(str, Enum):
    """Named solar events."""

    solar_noon = "solar_noon"
    nadir = "nadir"
    sunrise = "sunrise"
    sunset = "sunset"
    sunrise_end = "sunrise_end"
    sunset_start = "sunset_start"
    dawn = "dawn"
    dusk = "dusk"
    nautical_dawn = "nautical_dawn"
    nautical_dusk = "nautical_dusk"
    night_end = "night_end"
    night = "night"
    golden_hour_end = "golden_hour_end"
    golden_hour = "golden_hour"

    @classmethod
    def parse(cls, value: "SunPhase | str") -> "SunPhase":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported sun phase: {value}") from exc


# (altitude in degrees, rising phase, setting phase)
PHASE_ANGLES: Tuple[Tuple[float, SunPhase, SunPhase], ...] = (
    (-0.833, SunPhase.sunrise, SunPhase.sunset),
    (-0.3, SunPhase.sunrise_end, SunPhase.sunset_start),
    (-6.0, SunPhase.dawn, SunPhase.dusk),
    (-12.0, SunPhase.nautical_dawn, SunPhase.nautical_dusk),
    (-18.0, SunPhase.night_end, SunPhase.night),
    (6.0, SunPhase.golden_hour_end, SunPhase.golden_hour),
)

_PHASE_LOOKUP: Mapping[SunPhase, Tuple[float, bool]] = MappingProxyType(
    {
        phase: (angle, phase is rising)
        for angle, rising, setting in PHASE_ANGLES
        for phase in (rising, setting)
    }
)

TWILIGHT_PHASES: Mapping[Twilight, Tuple[SunPhase, SunPhase]] = MappingProxyType(
    {
        Twilight.official: (SunPhase.sunrise, SunPhase.sunset),
        Twilight.civil: (SunPhase.dawn, SunPhase.dusk),
        Twilight.nautical: (SunPhase.nautical_dawn, SunPhase.nautical_dusk),
        Twilight.astronomical: (SunPhase.night_end, SunPhase.night),
    }
)


def phase_angle(phase: SunPhase | str) -> Tuple[float, bool]:
    """Return ``(altitude_deg, rising)`` for *phase*.

    Solar noon and nadir are transits, not altitude crossings, and have no entry.
    """

    phase = SunPhase.parse(phase)
    try:
        return _PHASE_LOOKUP[phase]
    except KeyError as exc:
        raise ValueError(f"Sun phase has no altitude threshold: {phase.value}") from exc


class _Day:
    """Transit quantities shared by every phase of one day."""

    __slots__ = ("lw", "phi", "cycle", "mean_anomaly", "longitude", "dec", "noon")

    def __init__(self, instant_ms: float, lat: float, lon: float) -> None:
        self.lw = RAD * -lon
        self.phi = RAD * lat
        days = to_days(instant_ms)
        self.cycle = julian_cycle(days, self.lw)
        transit = approx_transit(0.0, self.lw, self.cycle)
        self.mean_anomaly = solar_mean_anomaly(transit)
        self.longitude = ecliptic_longitude(self.mean_anomaly)
        self.dec = declination(self.longitude, 0.0)
        self.noon = solar_transit_j(transit, self.mean_anomaly, self.longitude)

    def crossing(self, altitude_deg: float, elevation_m: float) -> Tuple[float, float]:
        """Julian dates of the rising and setting crossings of *altitude_deg*."""

        target = (altitude_deg + observer_angle(elevation_m)) * RAD
        hour = hour_angle(target, self.phi, self.dec)
        setting = solar_transit_j(
            approx_transit(hour, self.lw, self.cycle), self.mean_anomaly, self.longitude
        )
        rising = self.noon - (setting - self.noon)
        return float(rising), float(setting)

    def cosine(self, altitude_deg: float, elevation_m: float) -> float:
        target = (altitude_deg + observer_angle(elevation_m)) * RAD
        return float(hour_angle_cosine(target, self.phi, self.dec))


def _to_instant(julian: float) -> Optional[float]:
    if math.isnan(julian):
        return None
    return float(from_julian(julian))


def _log_not_observable(phase: SunPhase, instant_ms: float, lat: float, lon: float) -> None:
    LOGGER.debug(
        json.dumps(
            {
                "event": "phase_not_observable",
                "phase": phase.value,
                "instant_ms": instant_ms,
                "lat": lat,
                "lon": lon,
            }
        )
    )


def time_at_phase(
    instant_ms: float,
    phase: SunPhase | str,
    lat: float,
    lon: float,
    elevation_m: float = 0.0,
) -> Optional[float]:
    """Compute when the sun reaches *phase* on the day of *instant_ms*.

    Parameters
    ----------
    instant_ms:
        Any instant of the requested day, in milliseconds since the Unix epoch.
    phase:
        :class:`SunPhase` member or its string value.
    lat, lon:
        Geographic coordinates in degrees (east-positive longitude).
    elevation_m:
        Observer elevation in meters; lowers the horizon for altitude phases.

    Returns
    -------
    float or None
        Milliseconds since the epoch, or ``None`` when the sun never reaches
        the phase's altitude on that day.
    """

    phase = SunPhase.parse(phase)
    day = _Day(instant_ms, lat, lon)
    if phase is SunPhase.solar_noon:
        return float(from_julian(day.noon))
    if phase is SunPhase.nadir:
        return float(from_julian(day.noon - 0.5))

    angle, is_rising = phase_angle(phase)
    rising, setting = day.crossing(angle, elevation_m)
    result = _to_instant(rising if is_rising else setting)
    if result is None:
        _log_not_observable(phase, instant_ms, lat, lon)
    return result


def get_times(
    instant_ms: float, lat: float, lon: float, elevation_m: float = 0.0
) -> SunTimes:
    """Compute every :class:`SunPhase` for the day of *instant_ms* in one pass."""

    day = _Day(instant_ms, lat, lon)
    times: Dict[str, Optional[float]] = {
        SunPhase.solar_noon.value: float(from_julian(day.noon)),
        SunPhase.nadir.value: float(from_julian(day.noon - 0.5)),
    }
    for angle, rising_phase, setting_phase in PHASE_ANGLES:
        rising, setting = day.crossing(angle, elevation_m)
        for phase, julian in ((rising_phase, rising), (setting_phase, setting)):
            times[phase.value] = _to_instant(julian)
            if times[phase.value] is None:
                _log_not_observable(phase, instant_ms, lat, lon)
    return SunTimes(**times)


def get_rise_set(
    instant_ms: float,
    lat: float,
    lon: float,
    elevation_m: float = 0.0,
    twilight: Twilight | str = Twilight.official,
) -> RiseSet:
    """Compute the rising and setting crossing of a twilight threshold.

    Unlike :func:`time_at_phase`, a missing crossing is reported with the
    reason: ``polar_day`` when the sun stays above the threshold all day,
    ``polar_night`` when it stays below. ``indeterminate`` means a NaN
    coordinate or elevation left the geometry undefined.
    """

    try:
        twilight = Twilight(twilight)
    except ValueError as exc:
        raise ValueError(f"Unsupported twilight selector: {twilight}") from exc

    rising_phase, _ = TWILIGHT_PHASES[twilight]
    angle, _ = phase_angle(rising_phase)
    day = _Day(instant_ms, lat, lon)
    cosine = day.cosine(angle, elevation_m)

    if not math.isfinite(cosine):
        result = RiseSet(status=RiseSetStatus.indeterminate, twilight=twilight)
    elif cosine < -1.0:
        result = RiseSet(status=RiseSetStatus.polar_day, twilight=twilight)
    elif cosine > 1.0:
        result = RiseSet(status=RiseSetStatus.polar_night, twilight=twilight)
    else:
        rising, setting = day.crossing(angle, elevation_m)
        result = RiseSet(
            status=RiseSetStatus.ok,
            twilight=twilight,
            rising=_to_instant(rising),
            setting=_to_instant(setting),
        )

    LOGGER.debug(
        json.dumps(
            {
                "event": "rise_set",
                "instant_ms": instant_ms,
                "lat": lat,
                "lon": lon,
                "twilight": twilight.value,
                "status": result.status.value,
            }
        )
    )
    return result
