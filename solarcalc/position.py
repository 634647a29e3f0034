"""Sun position (azimuth, altitude) for an instant and location."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike

from .astro import RAD, altitude, azimuth, sidereal_time, sun_coords, to_days
from .models import SunPosition

__all__ = ["SunTrack", "get_position", "get_positions", "pos", "sun_track"]

DEFAULT_TRACK_STEP_MS = 5 * 60 * 1000


@dataclass(frozen=True)
class SunTrack:
    """Sampled sun positions over a time window."""

    times: np.ndarray
    azimuth: np.ndarray
    altitude: np.ndarray


def _horizontal(instant_ms: ArrayLike, lat: float, lon: float) -> Tuple[np.ndarray, np.ndarray]:
    lw = RAD * -lon
    phi = RAD * lat
    days = to_days(instant_ms)
    coords = sun_coords(days)
    hour = sidereal_time(days, lw) - coords.right_ascension
    return (
        azimuth(hour, phi, coords.declination),
        altitude(hour, phi, coords.declination),
    )


def get_position(instant_ms: float, lat: float, lon: float) -> SunPosition:
    """Compute the sun's position for *instant_ms* at *lat*, *lon*.

    Parameters
    ----------
    instant_ms:
        Milliseconds since the Unix epoch (UTC).
    lat, lon:
        Geographic coordinates in degrees (east-positive longitude).

    Returns
    -------
    SunPosition
        Azimuth from north and altitude above the horizon, in radians.
    """

    az, alt = _horizontal(instant_ms, lat, lon)
    return SunPosition(azimuth=float(az), altitude=float(alt))


pos = get_position


def get_positions(
    instants_ms: ArrayLike, lat: float, lon: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized :func:`get_position` returning ``(azimuth, altitude)`` arrays."""

    az, alt = _horizontal(np.asarray(instants_ms, dtype=float), lat, lon)
    return np.asarray(az), np.asarray(alt)


def sun_track(
    start_ms: float,
    end_ms: float,
    lat: float,
    lon: float,
    step_ms: float = DEFAULT_TRACK_STEP_MS,
) -> SunTrack:
    """Sample the sun's position from *start_ms* to *end_ms* inclusive every *step_ms*.

    The window must be finite; a NaN or infinite bound raises ``ValueError``.
    """

    if not step_ms > 0:
        raise ValueError("step_ms must be positive")
    if not (math.isfinite(start_ms) and math.isfinite(end_ms)):
        raise ValueError("start_ms and end_ms must be finite")
    count = int(np.floor((end_ms - start_ms) / step_ms)) + 1
    times = start_ms + step_ms * np.arange(max(count, 0), dtype=float)
    az, alt = get_positions(times, lat, lon)
    return SunTrack(times=times, azimuth=az, altitude=alt)
