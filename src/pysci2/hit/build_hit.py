"""
This module implements routines to produce the Sci2 hit tier from the tcal
tier.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping

import awkward as ak
import lgdo
import lgdo.lh5 as lh5
import numpy as np
from lgdo.lh5 import LH5Iterator, ls

from ..errors import InputUnavailable
from ..utils import getenv_bool
from .data import CalibratedTiming, HitRecord
from .hit_par import HitPars, HitParStore
from .tcal2hit import Tcal2Hit

log = logging.getLogger(__name__)

_hit_fields = {
    "detector": (np.uint8, None),
    "position": (np.float64, "mm"),
    "tmean": (np.float64, "ns"),
    "tmean_w_tref": (np.float64, "ns"),
}


def build_hit(
    infile: str,
    outfile: str = None,
    hit_config: str | Mapping = None,
    in_table: str = "sci2/tcal",
    out_table: str = "sci2/hit",
    n_max: int = np.inf,
    wo_mode: str = "write_safe",
    buffer_len: int = 3200,
    online: bool = None,
) -> int:
    """Reconstruct Sci2 hits for every event of a tcal LH5 file.

    The input table holds one row per event, with
    :class:`~lgdo.types.vectorofvectors.VectorOfVectors` columns
    ``detector``, ``channel`` and ``raw_time_ns``. The output table holds one
    row per input row, with columns ``detector``, ``position``, ``tmean`` and
    ``tmean_w_tref``. Events without hits yield empty rows.

    Parameters
    ----------
    infile
        input LH5 file name containing the tcal table.
    outfile
        name of the output LH5 file. If ``None``, create a file in the
        current directory and append `_hit` to the input name.
    hit_config
        dictionary or name of JSON/YAML file holding the calibration
        parameters. For example:

        .. code-block:: json

            {"pos_p0": 0.0, "pos_p1": 0.5}

    in_table
        name of the tcal table in `infile`.
    out_table
        name of the hit table in `outfile`.
    n_max
        maximum number of events to process.
    wo_mode
        forwarded to :meth:`lgdo.lh5.write`.
    buffer_len
        number of events read from disk at a time.
    online
        if ``True``, do not write any output. Defaults to the
        ``PYSCI2_ONLINE`` environment variable.

    Returns
    -------
    n_events
        number of processed events.
    """
    if hit_config is None:
        raise ValueError("hit_config must be specified")

    if online is None:
        online = getenv_bool("PYSCI2_ONLINE", default=False)

    if not os.path.exists(infile):
        e = InputUnavailable("input file not found")
        e.file = infile
        raise e

    in_table = in_table.strip("/")
    parent = in_table.rpartition("/")[0]
    if in_table not in (ls(infile, f"{parent}/") if parent else ls(infile)):
        e = InputUnavailable("tcal table not found")
        e.table = in_table
        e.file = infile
        raise e

    if outfile is None:
        outfile = os.path.splitext(os.path.basename(infile))[0]
        outfile = outfile.removesuffix("_tcal") + "_hit.lh5"

    task = Tcal2Hit(HitParStore(hit_config), online=online)
    task.init()

    lh5_it = LH5Iterator(infile, in_table, buffer_len=buffer_len)
    log.info(f"Processing table '{in_table}' in file {infile}")

    n_events = 0
    first_done = False
    for tbl_obj in lh5_it:
        n_rows = min(len(tbl_obj), n_max - n_events)
        if n_rows <= 0:
            break

        hits = [task.process_event(ev) for ev in _iter_events(tbl_obj, n_rows)]
        n_events += n_rows
        log.debug(f"reconstructed {sum(len(h) for h in hits)} hits in {n_rows} events")

        if task.online:
            continue

        lh5.write(
            obj=_hits_to_table(hits),
            name=out_table,
            lh5_file=outfile,
            wo_mode=wo_mode if first_done is False else "append",
        )
        first_done = True

    log.info(f"processed {n_events} events")
    return n_events


def build_hit_events(
    events: Iterable[Iterable[CalibratedTiming]],
    hit_config: HitPars | str | Path | Mapping,
) -> list[list[HitRecord]]:
    """Reconstruct the hits of a sequence of in-memory events.

    Each event is processed independently from the others with the same
    parameter snapshot.
    """
    if isinstance(hit_config, HitPars):
        store = HitParStore()
        store.set(hit_config)
    else:
        store = HitParStore(hit_config)

    task = Tcal2Hit(store)
    task.init()
    return [task.process_event(ev) for ev in events]


def _iter_events(tbl_obj: lgdo.Table, n_rows: int):
    """Yield the :class:`.CalibratedTiming` list of each of the first
    `n_rows` rows of a tcal table."""
    data = tbl_obj.view_as("ak")[:n_rows]

    counts = ak.to_numpy(ak.num(data.detector, axis=1))
    detector = ak.to_numpy(ak.flatten(data.detector))
    channel = ak.to_numpy(ak.flatten(data.channel))
    raw_time_ns = ak.to_numpy(ak.flatten(data.raw_time_ns))

    start = 0
    for n in counts:
        stop = start + n
        yield [
            CalibratedTiming(int(d), int(ch), float(t))
            for d, ch, t in zip(
                detector[start:stop], channel[start:stop], raw_time_ns[start:stop]
            )
        ]
        start = stop


def _hits_to_table(hits: list[list[HitRecord]]) -> lgdo.Table:
    """Pack per-event hit lists into a table with one row per event."""
    cumulative_length = np.cumsum([len(h) for h in hits], dtype=np.uint32)

    out_tbl = lgdo.Table(size=len(hits))
    for field, (dtype, units) in _hit_fields.items():
        flattened_data = np.array(
            [getattr(hit, field) for ev in hits for hit in ev], dtype=dtype
        )
        out_tbl.add_field(
            field,
            lgdo.VectorOfVectors(
                flattened_data=flattened_data,
                cumulative_length=cumulative_length,
                attrs={"units": units} if units is not None else None,
            ),
        )

    return out_tbl
