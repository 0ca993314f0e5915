"""
pysci2: hit-level reconstruction for the Sci2 scintillator detectors.
"""

from ._version import version as __version__
from .hit import ChannelBuffers, HitPars, HitParStore, Tcal2Hit, reconstruct_hits

__all__ = [
    "__version__",
    "ChannelBuffers",
    "HitPars",
    "HitParStore",
    "Tcal2Hit",
    "reconstruct_hits",
]
