import os
from pathlib import Path

import numpy as np
import pytest
from lgdo import lh5
from lgdo.types import Table, VectorOfVectors

config_dir = Path(__file__).parent / "hit" / "configs"

# (detector, channel, raw_time_ns) of each event
tcal_events = [
    [(1, 1, 10.0), (1, 2, 8.0), (1, 1, 12.0), (1, 2, 9.0)],
    [],
    [(1, 1, 5.0), (1, 2, 3.0), (1, 3, 1.0), (2, 1, 2.0)],
    [(2, 3, 1.0), (2, 1, 4.0), (2, 2, 2.0), (2, 3, 1.5)],
]


@pytest.fixture(scope="session")
def tmp_dir(tmpdir_factory):
    out_dir = tmpdir_factory.mktemp("data")
    assert os.path.exists(out_dir)
    return out_dir


@pytest.fixture(scope="session")
def hit_pars_file():
    return f"{config_dir}/sci2-hit-pars.json"


@pytest.fixture(scope="session")
def tcal_test_file(tmp_dir):
    out_name = f"{tmp_dir}/sci2_run0001_tcal.lh5"

    cumulative_length = np.cumsum([len(ev) for ev in tcal_events], dtype=np.uint32)
    flat = [m for ev in tcal_events for m in ev]

    tbl = Table(size=len(tcal_events))
    for i, (field, dtype) in enumerate(
        [("detector", np.uint8), ("channel", np.uint8), ("raw_time_ns", np.float64)]
    ):
        tbl.add_field(
            field,
            VectorOfVectors(
                flattened_data=np.array([m[i] for m in flat], dtype=dtype),
                cumulative_length=cumulative_length,
            ),
        )

    lh5.write(obj=tbl, name="sci2/tcal", lh5_file=out_name, wo_mode="overwrite_file")
    assert os.path.exists(out_name)

    return out_name
