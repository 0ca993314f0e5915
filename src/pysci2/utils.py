from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

__file_extensions__ = {"json": [".json"], "yaml": [".yaml", ".yml"]}


def getenv_bool(name: str, default: bool = False) -> bool:
    """Get environment value as a boolean, returning True for 1, t and true
    (caps-insensitive), and False for any other value and default if undefined.
    """
    val = os.getenv(name)
    if not val:
        return default
    return val.lower() in ("1", "t", "true")


def expand_path(fname: str | Path) -> Path:
    """Expand ``~`` and environment variables (e.g. ``$SCI2_PARS``) in a
    file name."""
    return Path(os.path.expandvars(os.path.expanduser(str(fname))))


def load_dict(fname: str | Path, ftype: str | None = None) -> dict:
    """Load a JSON or YAML parameter file as a Python dict.

    The file type is guessed from the extension unless `ftype` is given.
    """
    fname = expand_path(fname)

    if ftype is None:
        for _ftype, exts in __file_extensions__.items():
            if fname.suffix in exts:
                ftype = _ftype

    if ftype not in __file_extensions__:
        raise NotImplementedError(f"unsupported file format {ftype} of {fname}")

    log.debug(f"loading {ftype} dict from: {fname}")

    with fname.open() as f:
        if ftype == "json":
            return json.load(f)
        return yaml.safe_load(f)
