"""
Reconstruction of Sci2 hits (position and mean time) from time-calibrated
left/right channel measurements.
"""

from __future__ import annotations

import logging
from typing import Iterable, MutableSequence

from ..errors import InputUnavailable
from .channel_buffer import ChannelBuffers
from .data import LEFT, RIGHT, TIME_UNDEFINED, TREF, CalibratedTiming, HitRecord
from .hit_par import HitPars, HitParStore

log = logging.getLogger(__name__)


def reconstruct_hits(
    buffers: ChannelBuffers,
    pars: HitPars,
    sink: MutableSequence[HitRecord] = None,
) -> MutableSequence[HitRecord]:
    """Pair left and right times of each detector and convert them into hits.

    For each detector, the i-th left time is paired with the i-th right time,
    provided both channels recorded the same number of times and are not
    saturated. Otherwise no hit is produced for the detector. This selection
    is adequate for online monitoring only: choosing the good hit among
    several (e.g. by checking the time difference between the two detectors)
    is left to later analysis stages.

    Parameters
    ----------
    buffers
        times of one event, aggregated per detector and channel.
    pars
        position calibration.
    sink
        collection the hits are appended to. A new list if ``None``.

    Returns
    -------
    sink
        the output collection, with hits ordered by detector, then by
        buffer index.
    """
    if sink is None:
        sink = []

    for d in range(buffers.n_detectors):
        n_left = buffers.multiplicity(d, LEFT)
        n_right = buffers.multiplicity(d, RIGHT)

        if n_left != n_right or buffers.is_saturated(d, LEFT):
            log.debug(
                f"skipping detector {d + 1}: multiplicities left={n_left}, right={n_right}"
            )
            continue

        t_left = buffers.get_times(d, LEFT)
        t_right = buffers.get_times(d, RIGHT)
        t_ref = buffers.get_times(d, TREF)

        for m in range(n_left):
            position = pars.pos_p0 + pars.pos_p1 * (t_left[m] - t_right[m])
            tmean = 0.5 * (t_left[m] + t_right[m])
            if len(t_ref) == 1:
                tmean_w_tref = tmean - t_ref[0]
            else:
                tmean_w_tref = TIME_UNDEFINED

            sink.append(
                HitRecord(
                    detector=d + 1,
                    position=float(position),
                    tmean=float(tmean),
                    tmean_w_tref=float(tmean_w_tref),
                )
            )

    return sink


class Tcal2Hit:
    """Event-by-event task converting Sci2 tcal data into hit data.

    The task owns its aggregation buffers and its output collection. The
    caller drives it through the hooks of an event loop:

    - :meth:`init` once, before the first event;
    - :meth:`exec` for every event, followed by :meth:`finish_event`;
    - :meth:`reinit` when the parameters must be re-read (e.g. at a run
      change), never while an event is being processed.

    Parameters
    ----------
    par_store
        container of the calibration parameters.
    online
        if ``True``, the hits are not meant to be persisted by the caller.

    Examples
    --------
    >>> task = Tcal2Hit(HitParStore({"pos_p0": 0, "pos_p1": 0.5}))
    >>> task.init()
    >>> hits = task.process_event([CalibratedTiming(1, 1, 10.0), CalibratedTiming(1, 2, 8.0)])
    >>> hits[0].position
    1.0
    """

    def __init__(self, par_store: HitParStore, online: bool = False) -> None:
        self.par_store = par_store
        self.online = online
        self.pars = None
        self.buffers = ChannelBuffers()
        self.hits = []
        self.n_events = 0

    def init(self) -> None:
        """Fetch the parameters. Raises :class:`.ConfigurationMissing` if
        they are not available."""
        self.pars = self.par_store.get()
        self.n_events = 0
        log.debug(f"initialized with {self.pars}")

    def reinit(self) -> None:
        """Reload the parameters from their source and fetch them again."""
        self.par_store.reload()
        self.pars = self.par_store.get()
        log.info(f"re-initialized with {self.pars}")

    def exec(self, timings: Iterable[CalibratedTiming]) -> list[HitRecord]:
        """Process one event, appending its hits to :attr:`hits`."""
        if self.pars is None:
            self.init()

        if timings is None:
            raise InputUnavailable("Sci2 tcal data not found")

        self.buffers.fill(timings)
        reconstruct_hits(self.buffers, self.pars, self.hits)
        self.n_events += 1
        return self.hits

    def finish_event(self) -> None:
        self.hits.clear()

    def process_event(self, timings: Iterable[CalibratedTiming]) -> list[HitRecord]:
        """Clear the output, process one event and return a copy of its hits."""
        self.finish_event()
        return list(self.exec(timings))
