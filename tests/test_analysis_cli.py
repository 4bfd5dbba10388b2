import json

import pytest

from quarkcoal.analysis_cli import main
from quarkcoal.event import Event
from quarkcoal.eventio import EventWriter
from quarkcoal.particle import Hadron


def _hadron(bn, pid, angle_sign=1.0):
    return Hadron(1.0, angle_sign * 0.5, 0.0, 1.0, angle_sign * 0.3, 0.1, bn, 0.2, pid=pid)


def _write_events(path, count):
    with EventWriter(path) as writer:
        for i in range(count):
            hadrons = [_hadron(1.0, 2212), _hadron(0.0, 211, -1.0), _hadron(-1.0, -2212)]
            if i % 2:
                hadrons.append(_hadron(0.0, 111))
            writer.write(Event(hadrons=hadrons))


def test_missing_input_returns_one(tmp_path):
    assert main(["-s", str(tmp_path)]) == 1


def test_same_event_outputs(tmp_path):
    data = tmp_path / "events.jsonl"
    _write_events(data, 4)
    assert main(["-i", str(data), "-s", str(tmp_path)]) == 0
    qa = json.loads((tmp_path / "qa_offline.json").read_text())
    assert sum(qa["hPID"]["counts"]) == 3 * 4 + 2
    cve = json.loads((tmp_path / "cve_single_offline.json").read_text())
    assert "hCdPhiP_Baryon-Baryon" in cve
    assert not (tmp_path / "cve_mix_offline.json").exists()


def test_mixed_outputs(tmp_path):
    data = tmp_path / "events.jsonl"
    _write_events(data, 3)
    assert main(["-i", str(data), "-s", str(tmp_path), "-m", "-p", "1"]) == 0
    mixed = json.loads((tmp_path / "cve_mix_offline.json").read_text())
    assert "hCdPhiP_Baryon-Baryon_MixEvt" in mixed
    same = json.loads((tmp_path / "cve_single_offline.json").read_text())
    mixed_entries = sum(h.get("entries", 0) for h in mixed.values())
    same_entries = sum(h.get("entries", 0) for h in same.values())
    assert mixed_entries > 0
    assert same_entries > 0


def test_small_pool_warning(tmp_path, capsys):
    data = tmp_path / "events.jsonl"
    _write_events(data, 2)
    assert main(["-i", str(data), "-s", str(tmp_path), "-m", "-p", "5"]) == 0
    assert "Warning" in capsys.readouterr().err


def test_bad_pool_size_exits(tmp_path):
    with pytest.raises(SystemExit):
        main(["-i", "x", "-p", "lots"])