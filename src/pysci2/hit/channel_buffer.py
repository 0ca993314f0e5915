r"""
Per-event aggregation of calibrated times into fixed-capacity buffers, one per
detector and channel.

The buffers are plain :class:`numpy.ndarray`\ s of shape ``(2, 3, 64)`` with a
companion multiplicity array of shape ``(2, 3)``. Memory use per event is
bounded: measurements beyond the capacity of a channel are dropped, and the
multiplicity of that channel stays at the capacity.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from .data import MAX_MULT, N_CHANNELS, N_DETECTORS, CalibratedTiming

log = logging.getLogger(__name__)


class ChannelBuffers:
    """Bounded buffers of calibrated times for all Sci2 channels of one event.

    Attributes
    ----------
    times
        array of shape ``(n_detectors, n_channels, capacity)`` holding the
        recorded times in insertion order. Slots beyond the multiplicity are
        zero.
    mult
        array of shape ``(n_detectors, n_channels)`` holding the number of
        stored times per channel. Never exceeds `capacity`.
    capacity
        maximum number of times stored per channel.
    """

    def __init__(
        self,
        n_detectors: int = N_DETECTORS,
        n_channels: int = N_CHANNELS,
        capacity: int = MAX_MULT,
    ) -> None:
        self.n_detectors = n_detectors
        self.n_channels = n_channels
        self.capacity = capacity
        self.times = np.zeros((n_detectors, n_channels, capacity), dtype=np.float64)
        self.mult = np.zeros((n_detectors, n_channels), dtype=np.int32)
        self.n_dropped = 0

    @classmethod
    def from_timings(cls, timings: Iterable[CalibratedTiming]) -> ChannelBuffers:
        """Create buffers and fill them with one event's measurements."""
        return cls().fill(timings)

    def reset(self) -> None:
        """Zero all multiplicities and times. Call at the start of each event."""
        self.times[...] = 0.0
        self.mult[...] = 0
        self.n_dropped = 0

    def add(self, detector: int, channel: int, raw_time_ns: float) -> bool:
        """Append a time to the buffer of a channel.

        Parameters
        ----------
        detector
            one-based detector identifier.
        channel
            one-based channel identifier.
        raw_time_ns
            calibrated time in ns.

        Returns
        -------
        stored
            ``False`` if the channel is already at capacity and the time was
            dropped.
        """
        if not 1 <= detector <= self.n_detectors:
            raise ValueError(f"detector identifier {detector} out of range")
        if not 1 <= channel <= self.n_channels:
            raise ValueError(f"channel identifier {channel} out of range")

        d = detector - 1
        ch = channel - 1
        m = self.mult[d, ch]
        if m >= self.capacity:
            self.n_dropped += 1
            return False

        self.times[d, ch, m] = raw_time_ns
        self.mult[d, ch] = m + 1
        return True

    def fill(self, timings: Iterable[CalibratedTiming]) -> ChannelBuffers:
        """Reset the buffers and aggregate all measurements of one event."""
        self.reset()
        for tm in timings:
            self.add(tm.detector, tm.channel, tm.raw_time_ns)

        if self.n_dropped > 0:
            log.debug(f"dropped {self.n_dropped} times from saturated channels")

        return self

    def multiplicity(self, d: int, ch: int) -> int:
        """Number of stored times for zero-based detector `d`, channel `ch`."""
        return int(self.mult[d, ch])

    def get_times(self, d: int, ch: int) -> np.ndarray:
        """View of the stored times for zero-based detector `d`, channel `ch`."""
        return self.times[d, ch, : self.mult[d, ch]]

    def is_saturated(self, d: int, ch: int) -> bool:
        return bool(self.mult[d, ch] >= self.capacity)

    def __repr__(self) -> str:
        return f"ChannelBuffers(mult={self.mult.tolist()}, capacity={self.capacity})"
