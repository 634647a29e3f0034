"""Pydantic models for solar positions, event times and observer queries."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:  # pragma: no cover
    from .phases import SunPhase


class Twilight(str, Enum):
    """Enumeration of supported twilight definitions."""

    official = "official"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"


class RiseSetStatus(str, Enum):
    """Outcome of a rise/set computation for one day."""

    ok = "ok"
    polar_day = "polar_day"
    polar_night = "polar_night"
    indeterminate = "indeterminate"


class SunPosition(BaseModel):
    """Apparent position of the sun for an instant and location."""

    model_config = ConfigDict(frozen=True)

    azimuth: float = Field(
        ..., description="Azimuth in radians, from north increasing towards east"
    )
    altitude: float = Field(..., description="Altitude above the horizon in radians")


class SunTimes(BaseModel):
    """Times of every solar phase for one day, in milliseconds since the epoch.

    ``None`` marks a phase that does not occur on that day at that latitude.
    """

    model_config = ConfigDict(frozen=True)

    solar_noon: float
    nadir: float
    sunrise: Optional[float] = None
    sunset: Optional[float] = None
    sunrise_end: Optional[float] = None
    sunset_start: Optional[float] = None
    dawn: Optional[float] = None
    dusk: Optional[float] = None
    nautical_dawn: Optional[float] = None
    nautical_dusk: Optional[float] = None
    night_end: Optional[float] = None
    night: Optional[float] = None
    golden_hour_end: Optional[float] = None
    golden_hour: Optional[float] = None

    def at(self, phase: "SunPhase | str") -> Optional[float]:
        """Return the time of *phase*, accepting the enum or its string value."""

        from .phases import SunPhase

        return getattr(self, SunPhase.parse(phase).value)

    def as_dict(self) -> Dict["SunPhase", Optional[float]]:
        from .phases import SunPhase

        return {phase: getattr(self, phase.value) for phase in SunPhase}


class RiseSet(BaseModel):
    """Rising and setting crossing of one twilight threshold."""

    model_config = ConfigDict(frozen=True)

    status: RiseSetStatus = Field(..., description="Computation status")
    twilight: Twilight = Field(..., description="Applied twilight definition")
    rising: Optional[float] = Field(None, description="Rising crossing in epoch milliseconds")
    setting: Optional[float] = Field(None, description="Setting crossing in epoch milliseconds")


class Observer(BaseModel):
    """Validated observer location.

    The computational functions accept any float; this model is for callers
    that want coordinates checked before use.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in degrees (east-positive)"
    )
    elevation_m: float = Field(0.0, ge=-500.0, description="Observer elevation in meters")

    def position(self, instant_ms: float) -> SunPosition:
        from .position import get_position

        return get_position(instant_ms, self.lat, self.lon)

    def times(self, instant_ms: float) -> SunTimes:
        from .phases import get_times

        return get_times(instant_ms, self.lat, self.lon, self.elevation_m)

    def rise_set(
        self, instant_ms: float, twilight: Twilight | str = Twilight.official
    ) -> RiseSet:
        from .phases import get_rise_set

        return get_rise_set(instant_ms, self.lat, self.lon, self.elevation_m, twilight)
