"""
Data types exchanged with the surrounding event store: calibrated timing
measurements (input) and hit records (output).
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

N_DETECTORS = 2
N_CHANNELS = 3
MAX_MULT = 64

# zero-based channel indices
LEFT = 0
RIGHT = 1
TREF = 2

POS_UNDEFINED = -1000.0
TIME_UNDEFINED = np.nan


class CalibratedTiming(NamedTuple):
    """A time-calibrated measurement of one Sci2 channel.

    Attributes
    ----------
    detector
        detector identifier, 1 or 2.
    channel
        channel identifier, 1 (left), 2 (right) or 3 (time reference).
    raw_time_ns
        calibrated time in nanoseconds.
    """

    detector: int
    channel: int
    raw_time_ns: float


class HitRecord(NamedTuple):
    """A reconstructed Sci2 hit.

    Attributes
    ----------
    detector
        detector identifier, 1 or 2.
    position
        calibrated transverse position.
    tmean
        mean of the matched left and right times, in ns.
    tmean_w_tref
        `tmean` minus the reference time of the detector. Set to
        :data:`TIME_UNDEFINED` unless exactly one reference time was recorded
        for the detector in the event.
    """

    detector: int
    position: float = POS_UNDEFINED
    tmean: float = TIME_UNDEFINED
    tmean_w_tref: float = TIME_UNDEFINED

    @property
    def has_tref(self) -> bool:
        return not np.isnan(self.tmean_w_tref)
