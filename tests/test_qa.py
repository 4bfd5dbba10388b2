import json
import math

import pytest

from quarkcoal.event import Event
from quarkcoal.particle import Hadron
from quarkcoal.qa import AFTERBURNED_LABELS, RATIO_LABELS, QAAnalyzer


def _hadron(bn, pid, px=1.0, py=0.0, pz=0.0, x=1.0, y=0.0, afterburned=False):
    return Hadron(x, y, 0.0, px, py, pz, bn, 0.0, pid=pid, afterburned=afterburned)


def _sample_event():
    return Event(
        hadrons=[
            _hadron(1.0, 2212),
            _hadron(-1.0, -2212),
            _hadron(0.0, 211),
            _hadron(0.0, 211, afterburned=True),
        ]
    )


def test_empty_analyzer_ratios_are_zero():
    qa = QAAnalyzer()
    ratios = qa.ratios()
    assert list(ratios) == list(RATIO_LABELS)
    assert all(value == 0.0 for value in ratios.values())
    assert qa.sorted_pid_counts() == []


def test_process_fills_groups_separately():
    qa = QAAnalyzer()
    qa.process(_sample_event())
    assert qa.baryons.pt.entries == 1
    assert qa.antibaryons.pt.entries == 1
    assert qa.mesons.pt.entries == 2
    assert qa.class_counts["meson"] == 2
    assert sum(qa.mesons.eta.counts) == 2


def test_phi_is_mapped_into_positive_range():
    qa = QAAnalyzer()
    qa.process(Event(hadrons=[_hadron(0.0, 211, px=0.0, py=-1.0, x=0.0, y=-1.0)]))
    hist = qa.mesons.phi_momentum
    assert hist.underflow == 0.0
    assert hist.overflow == 0.0
    assert sum(hist.counts) == 1.0


def test_zero_pt_does_not_raise_and_goes_to_overflow():
    qa = QAAnalyzer()
    qa.process(Event(hadrons=[_hadron(0.0, 211, px=0.0, py=0.0, pz=2.0)]))
    assert qa.mesons.eta.overflow == 1.0


def test_ratios_from_counts():
    qa = QAAnalyzer()
    qa.process(_sample_event())
    ratios = qa.ratios()
    assert ratios["(#bar{B}+B)/M"] == pytest.approx(1.0)
    assert ratios["#bar{B}/B"] == ratios["#bar{p}/p"]
    assert ratios["#Lambda/p"] == 0.0
    assert ratios["K^{+}/#pi^{+}"] == 0.0


def test_sorted_pid_counts_largest_first():
    qa = QAAnalyzer()
    qa.process(_sample_event())
    counts = qa.sorted_pid_counts()
    assert counts[0] == (211, 2.0)
    assert {pid for pid, _ in counts} == {211, 2212, -2212}
    assert [c for _, c in counts] == sorted((c for _, c in counts), reverse=True)


def test_afterburned_fractions():
    qa = QAAnalyzer()
    qa.process(_sample_event())
    profile = qa.afterburned_ratio
    assert profile.labels == list(AFTERBURNED_LABELS)
    assert profile.mean(0) == pytest.approx(0.25)
    assert profile.mean(1) == 0.0
    assert profile.mean(2) == pytest.approx(0.5)


def test_empty_event_fills_no_profile():
    qa = QAAnalyzer()
    qa.process(Event())
    assert qa.afterburned_ratio.counts == [0, 0, 0]


def test_finish_writes_json(tmp_path):
    qa = QAAnalyzer()
    qa.process(_sample_event())
    path = tmp_path / "qa.json"
    qa.finish(path)
    data = json.loads(path.read_text())
    assert data["hPt_b"]["entries"] == 1
    assert data["hPID"]["labels"][0] == "211"
    assert data["hPIDName"]["labels"][0] == "pi+"
    assert data["hRatio"]["labels"] == list(RATIO_LABELS)
    assert "hAfterBurnedFlagRatio" in data
    assert math.isclose(sum(data["hPID"]["counts"]), 4.0)