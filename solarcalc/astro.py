"""Low-precision solar model: time conversion and spherical astronomy helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Union

import numpy as np
from numpy.typing import ArrayLike

__all__ = [
    "DAY_MS",
    "J1970",
    "J2000",
    "RAD",
    "OBLIQUITY",
    "PERIHELION",
    "J0",
    "SolarCoordinates",
    "to_instant",
    "from_instant",
    "to_julian",
    "from_julian",
    "to_days",
    "right_ascension",
    "declination",
    "azimuth",
    "altitude",
    "sidereal_time",
    "solar_mean_anomaly",
    "equation_of_center",
    "ecliptic_longitude",
    "sun_coords",
    "julian_cycle",
    "approx_transit",
    "equation_of_time",
    "solar_transit_j",
    "hour_angle_cosine",
    "hour_angle",
    "observer_angle",
]

Angle = Union[float, np.ndarray]

DAY_MS = 86_400_000
J1970 = 2440588.0
J2000 = 2451545.0
RAD = math.pi / 180.0
OBLIQUITY = 23.4397 * RAD  # Obliquity of the ecliptic at J2000.
PERIHELION = 102.9372 * RAD  # Longitude of Earth's perihelion.
J0 = 0.0009  # Transit offset of the sun's centre, in days.

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class SolarCoordinates:
    """Ecliptic and equatorial coordinates of the sun for one instant (radians)."""

    mean_anomaly: Angle
    ecliptic_longitude: Angle
    declination: Angle
    right_ascension: Angle


def to_instant(dt: datetime) -> float:
    """Convert a timezone-aware datetime into milliseconds since the Unix epoch."""

    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    delta = dt.astimezone(UTC) - _EPOCH
    return delta.total_seconds() * 1000.0


def from_instant(instant_ms: float) -> datetime:
    """Convert milliseconds since the Unix epoch into a UTC datetime."""

    return datetime.fromtimestamp(instant_ms / 1000.0, tz=UTC)


def to_julian(instant_ms: ArrayLike) -> Angle:
    return np.asarray(instant_ms, dtype=float) / DAY_MS - 0.5 + J1970


def from_julian(julian: ArrayLike) -> Angle:
    return (np.asarray(julian, dtype=float) + 0.5 - J1970) * DAY_MS


def to_days(instant_ms: ArrayLike) -> Angle:
    """Days elapsed since J2000.0 for *instant_ms*."""

    return to_julian(instant_ms) - J2000


# Equatorial and horizontal coordinate transforms.


def right_ascension(lon: Angle, lat: Angle) -> Angle:
    return np.arctan2(
        np.sin(lon) * math.cos(OBLIQUITY) - np.tan(lat) * math.sin(OBLIQUITY),
        np.cos(lon),
    )


def declination(lon: Angle, lat: Angle) -> Angle:
    return np.arcsin(
        np.sin(lat) * math.cos(OBLIQUITY)
        + np.cos(lat) * math.sin(OBLIQUITY) * np.sin(lon)
    )


def azimuth(hour: Angle, phi: Angle, dec: Angle) -> Angle:
    """Azimuth measured from north, increasing towards east, in ``[0, 2π]``."""

    return (
        np.arctan2(np.sin(hour), np.cos(hour) * np.sin(phi) - np.tan(dec) * np.cos(phi))
        + math.pi
    )


def altitude(hour: Angle, phi: Angle, dec: Angle) -> Angle:
    return np.arcsin(np.sin(phi) * np.sin(dec) + np.cos(phi) * np.cos(dec) * np.cos(hour))


def sidereal_time(days: Angle, lw: Angle) -> Angle:
    """Local sidereal time for *days* since J2000 and west longitude *lw*."""

    return (280.16 + 360.9856235 * days) * RAD - lw


# Solar coordinates.


def solar_mean_anomaly(days: Angle) -> Angle:
    return (357.5291 + 0.98560028 * days) * RAD


def equation_of_center(mean_anomaly: Angle) -> Angle:
    return (
        1.9148 * np.sin(mean_anomaly)
        + 0.02 * np.sin(2.0 * mean_anomaly)
        + 0.0003 * np.sin(3.0 * mean_anomaly)
    ) * RAD


def ecliptic_longitude(mean_anomaly: Angle) -> Angle:
    return mean_anomaly + equation_of_center(mean_anomaly) + PERIHELION + math.pi


def sun_coords(days: Angle) -> SolarCoordinates:
    """Compute the solar coordinates for *days* since J2000.

    The sun's ecliptic latitude is taken as zero, so declination and right
    ascension follow from the ecliptic longitude alone.
    """

    mean_anomaly = solar_mean_anomaly(days)
    longitude = ecliptic_longitude(mean_anomaly)
    return SolarCoordinates(
        mean_anomaly=mean_anomaly,
        ecliptic_longitude=longitude,
        declination=declination(longitude, 0.0),
        right_ascension=right_ascension(longitude, 0.0),
    )


# Transit and hour-angle helpers used by the phase calculator.


def julian_cycle(days: Angle, lw: Angle) -> Angle:
    """Index of the solar transit nearest to *days* for west longitude *lw*."""

    # Rounds half up, not to even.
    return np.floor(days - J0 - lw / (2.0 * math.pi) + 0.5)


def approx_transit(hour: Angle, lw: Angle, cycle: Angle) -> Angle:
    return J0 + (hour + lw) / (2.0 * math.pi) + cycle


def equation_of_time(mean_anomaly: Angle, longitude: Angle) -> Angle:
    """Equation of time in days for the given mean anomaly and ecliptic longitude."""

    return 0.0053 * np.sin(mean_anomaly) - 0.0069 * np.sin(2.0 * longitude)


def solar_transit_j(days: Angle, mean_anomaly: Angle, longitude: Angle) -> Angle:
    """Julian date of the solar transit following the approximate transit *days*.

    Parameters
    ----------
    days:
        Approximate transit expressed in days since J2000, as returned by
        :func:`approx_transit`.
    mean_anomaly, longitude:
        Solar mean anomaly and ecliptic longitude at the approximate transit.

    Returns
    -------
    float
        Julian date corrected by the equation of time.
    """

    return J2000 + days + equation_of_time(mean_anomaly, longitude)


def hour_angle_cosine(target: Angle, phi: Angle, dec: Angle) -> Angle:
    """Cosine of the hour angle at which the sun reaches altitude *target*.

    Values below -1 mean the sun stays above *target* all day, values above 1
    mean it never reaches it.
    """

    return (np.sin(target) - np.sin(phi) * np.sin(dec)) / (np.cos(phi) * np.cos(dec))


def hour_angle(target: Angle, phi: Angle, dec: Angle) -> Angle:
    """Hour angle for altitude *target*, or NaN when the altitude is never crossed."""

    with np.errstate(invalid="ignore", divide="ignore"):
        return np.arccos(hour_angle_cosine(target, phi, dec))


def observer_angle(elevation_m: float) -> float:
    """Horizon dip in degrees for an observer *elevation_m* above the surface."""

    if elevation_m <= 0:
        return 0.0
    return -2.076 * math.sqrt(elevation_m) / 60.0
