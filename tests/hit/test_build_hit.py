import os

import awkward as ak
import numpy as np
import pytest
from lgdo import lh5

from pysci2.errors import InputUnavailable
from pysci2.hit import CalibratedTiming, HitPars, build_hit, build_hit_events


def test_basics(tcal_test_file, hit_pars_file, tmp_dir):
    outfile = f"{tmp_dir}/sci2_run0001_hit.lh5"

    n_events = build_hit(
        tcal_test_file,
        outfile=outfile,
        hit_config=hit_pars_file,
        wo_mode="overwrite_file",
    )

    assert n_events == 4
    assert os.path.exists(outfile)
    assert lh5.ls(outfile, "sci2/") == ["sci2/hit"]

    tbl = lh5.read("sci2/hit", outfile)
    assert sorted(tbl.keys()) == ["detector", "position", "tmean", "tmean_w_tref"]
    assert tbl.position.attrs["units"] == "mm"
    assert tbl.tmean.attrs["units"] == "ns"

    data = lh5.read_as("sci2/hit", outfile, "ak")
    assert len(data) == 4
    assert ak.to_list(data.detector) == [[1, 1], [], [1], [2]]
    assert ak.to_list(data.position) == [[1.0, 1.5], [], [1.0], [1.0]]
    assert ak.to_list(data.tmean) == [[9.0, 10.5], [], [4.0], [3.0]]

    tref = ak.to_list(data.tmean_w_tref)
    assert tref[2] == [3.0]
    assert np.isnan(tref[0]).all()
    assert np.isnan(tref[3]).all()


def test_chunks(tcal_test_file, hit_pars_file, tmp_dir):
    outfile = f"{tmp_dir}/sci2_run0001_hit_chunks.lh5"

    build_hit(
        tcal_test_file,
        outfile=outfile,
        hit_config=hit_pars_file,
        wo_mode="overwrite_file",
        buffer_len=3,
    )

    data = lh5.read_as("sci2/hit", outfile, "ak")
    assert ak.to_list(data.position) == [[1.0, 1.5], [], [1.0], [1.0]]


def test_n_max(tcal_test_file, tmp_dir):
    outfile = f"{tmp_dir}/sci2_run0001_hit_nmax.lh5"

    n_events = build_hit(
        tcal_test_file,
        outfile=outfile,
        hit_config={"pos_p0": 0.0, "pos_p1": 1.0},
        n_max=2,
        wo_mode="overwrite_file",
    )

    assert n_events == 2
    data = lh5.read_as("sci2/hit", outfile, "ak")
    assert ak.to_list(data.position) == [[2.0, 3.0], []]


def test_online(tcal_test_file, hit_pars_file, tmp_dir):
    outfile = f"{tmp_dir}/sci2_run0001_hit_online.lh5"

    n_events = build_hit(
        tcal_test_file, outfile=outfile, hit_config=hit_pars_file, online=True
    )
    assert n_events == 4
    assert not os.path.exists(outfile)


def test_illegal_arguments(tcal_test_file, hit_pars_file, tmp_dir):
    with pytest.raises(ValueError):
        build_hit(tcal_test_file)

    with pytest.raises(InputUnavailable):
        build_hit(f"{tmp_dir}/missing_tcal.lh5", hit_config=hit_pars_file)

    with pytest.raises(InputUnavailable) as exc_info:
        build_hit(tcal_test_file, hit_config=hit_pars_file, in_table="sci2/cal")
    assert exc_info.value.table == "sci2/cal"
    assert "sci2/cal" in str(exc_info.value)


def test_build_hit_events():
    events = [
        [CalibratedTiming(1, 1, 10.0), CalibratedTiming(1, 2, 8.0)],
        [CalibratedTiming(1, 1, 10.0)],
        [],
        [CalibratedTiming(2, 1, 10.0), CalibratedTiming(2, 2, 8.0)],
    ]
    hits = build_hit_events(events, HitPars(0.0, 0.5))

    assert [len(h) for h in hits] == [1, 0, 0, 1]
    assert hits[0][0].position == 1.0
    assert hits[3][0].detector == 2

    assert build_hit_events(events, {"pos_p0": 1.0, "pos_p1": 0.5})[0][0].position == 2.0
