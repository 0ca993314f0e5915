"""
Routines to reconstruct Sci2 hits from time-calibrated channel data.
Specifically, to produce the hit-tier from the tcal-tier.
"""

from .build_hit import build_hit, build_hit_events
from .channel_buffer import ChannelBuffers
from .data import CalibratedTiming, HitRecord
from .hit_par import HitPars, HitParStore
from .tcal2hit import Tcal2Hit, reconstruct_hits

__all__ = [
    "build_hit",
    "build_hit_events",
    "CalibratedTiming",
    "ChannelBuffers",
    "HitPars",
    "HitParStore",
    "HitRecord",
    "Tcal2Hit",
    "reconstruct_hits",
]
