"""
Calibration parameters of the Sci2 hit reconstruction and their run-wide
container.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .. import utils
from ..errors import ConfigurationMissing

log = logging.getLogger(__name__)

# VFTX time-to-digital converter clock
VFTX_CLOCK_MHZ = 200.0


@dataclass(frozen=True)
class HitPars:
    """Immutable snapshot of the position calibration.

    ``position = pos_p0 + pos_p1 * (t_left - t_right)``
    """

    pos_p0: float = 0.0
    pos_p1: float = 1.0

    @property
    def clock_period_ns(self) -> float:
        """Period of the TDC clock in ns."""
        return 1.0 / VFTX_CLOCK_MHZ * 1000.0

    @classmethod
    def from_dict(cls, pars: Mapping) -> HitPars:
        """Build a snapshot from a dictionary with ``pos_p0`` and ``pos_p1``
        keys, optionally nested under a ``sci2`` key."""
        if "sci2" in pars:
            pars = pars["sci2"]

        try:
            return cls(pos_p0=float(pars["pos_p0"]), pos_p1=float(pars["pos_p1"]))
        except KeyError as e:
            raise ConfigurationMissing(f"parameter {e} not found") from e


class HitParStore:
    """Container of the current :class:`HitPars` snapshot.

    Readers call :meth:`get` and keep the snapshot they obtained for the
    duration of an event. :meth:`reload` and :meth:`set` replace the snapshot
    atomically, so a reload never changes the parameters of an event being
    processed.

    Parameters
    ----------
    source
        dictionary or name of a JSON/YAML file holding the parameters. If
        ``None``, the store stays empty until :meth:`set` is called.

    Examples
    --------
    >>> store = HitParStore({"pos_p0": 0.0, "pos_p1": 0.5})
    >>> store.get().pos_p1
    0.5
    """

    def __init__(self, source: str | Path | Mapping = None) -> None:
        self.source = source
        self._pars = None
        self._lock = threading.Lock()
        if source is not None:
            self.load()

    def load(self) -> HitPars:
        """(Re-)read the parameters from `source`."""
        if self.source is None:
            raise ConfigurationMissing("no parameter source configured")

        if isinstance(self.source, (str, Path)):
            try:
                pars_dict = utils.load_dict(self.source)
            except FileNotFoundError as e:
                raise ConfigurationMissing(
                    f"parameter file {self.source} not found"
                ) from e
        else:
            pars_dict = self.source

        pars = HitPars.from_dict(pars_dict)
        self.set(pars)
        log.info(f"loaded Sci2 hit parameters {pars}")
        return pars

    reload = load

    def set(self, pars: HitPars) -> None:
        with self._lock:
            self._pars = pars

    def get(self) -> HitPars:
        """Return the current snapshot."""
        with self._lock:
            pars = self._pars
        if pars is None:
            raise ConfigurationMissing("Sci2 hit parameters not loaded")
        return pars

    def is_loaded(self) -> bool:
        return self._pars is not None
