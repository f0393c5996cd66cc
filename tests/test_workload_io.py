from pathlib import Path

import pytest

from srtf_scheduler.models import Arrival
from srtf_scheduler.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":2,"burst_time":3},'
                 '{"name":"B","burst_time":1.5}]')
    arrivals = load_workload(p)
    assert isinstance(arrivals[0], Arrival)
    # sorted by arrival time, missing arrival defaults to 0
    assert [a.name for a in arrivals] == ["B", "A"]
    assert arrivals[0].arrival_time == 0
    assert arrivals[0].burst_time == 1.5


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    arrivals = load_workload(p)
    assert arrivals[0].name == "A"
    assert arrivals[1].arrival_time == 1


def test_rejects_bad_rows(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,0\n")
    with pytest.raises(ValueError):
        load_workload(p)

    q = tmp_path / "w.json"
    q.write_text('[{"name":"A"}]')
    with pytest.raises(ValueError):
        load_workload(q)


def test_rejects_unknown_format(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(ValueError):
        load_workload(p)


def test_rejects_non_finite_times(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":0,"burst_time":"nan"}]')
    with pytest.raises(ValueError):
        load_workload(p)

    q = tmp_path / "w.csv"
    q.write_text("name,arrival_time,burst_time\nA,inf,2\n")
    with pytest.raises(ValueError):
        load_workload(q)
