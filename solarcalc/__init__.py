"""Sun position and sunlight phase calculations."""

from .astro import from_instant, to_instant
from .models import Observer, RiseSet, RiseSetStatus, SunPosition, SunTimes, Twilight
from .phases import PHASE_ANGLES, SunPhase, get_rise_set, get_times, phase_angle, time_at_phase
from .position import SunTrack, get_position, get_positions, pos, sun_track

__all__ = [
    "PHASE_ANGLES",
    "Observer",
    "RiseSet",
    "RiseSetStatus",
    "SunPhase",
    "SunPosition",
    "SunTimes",
    "SunTrack",
    "Twilight",
    "from_instant",
    "get_position",
    "get_positions",
    "get_rise_set",
    "get_times",
    "phase_angle",
    "pos",
    "sun_track",
    "time_at_phase",
    "to_instant",
]
