import math

import pytest

from quarkcoal.histograms import Hist1D, LabelledCounts, Profile1D


def test_hist_fill_lands_in_bin():
    h = Hist1D(10, 0.0, 10.0)
    h.fill(2.5)
    assert h.counts[2] == 1.0
    assert sum(h.counts) == 1.0


def test_hist_under_and_overflow():
    h = Hist1D(4, 0.0, 1.0)
    h.fill(-0.1)
    h.fill(1.0)
    h.fill(float("nan"))
    assert h.underflow == 1.0
    assert h.overflow == 2.0
    assert sum(h.counts) == 0.0
    assert h.entries == 3


def test_hist_weights_and_entries_invariant():
    h = Hist1D(64, 0.0, 2 * math.pi)
    values = [0.1 * i for i in range(60)]
    for v in values:
        h.fill(v, 2.0)
    total = sum(h.counts) + h.underflow + h.overflow
    assert total == pytest.approx(2.0 * len(values))
    assert h.entries == len(values)


def test_hist_to_dict_matches_state():
    h = Hist1D(3, 0.5, 3.5, name="hRatio", labels=["a", "b", "c"])
    h.fill(1)
    h.counts[2] = 0.75
    data = h.to_dict()
    assert data["name"] == "hRatio"
    assert data["counts"] == h.counts
    assert data["labels"] == ["a", "b", "c"]
    assert data["nbins"] == 3


def test_hist_invalid_bins():
    with pytest.raises(ValueError):
        Hist1D(0, 0.0, 1.0)


def test_hist_invalid_range():
    with pytest.raises(ValueError):
        Hist1D(5, 1.0, 1.0)


def test_hist_label_count_mismatch():
    with pytest.raises(ValueError):
        Hist1D(3, 0.0, 3.0, labels=["only"])


def test_profile_mean():
    p = Profile1D(1, 0.0, 1.0)
    p.fill(0.5, 1.0)
    p.fill(0.5, 3.0)
    assert p.mean(0) == pytest.approx(2.0)
    assert p.counts[0] == 2


def test_profile_empty_bin_mean_is_zero():
    p = Profile1D(3, 0.5, 3.5)
    p.fill(1, 0.25)
    assert p.mean(1) == 0.0
    assert p.mean(0) == pytest.approx(0.25)


def test_profile_out_of_range_not_in_bins():
    p = Profile1D(150, 0, 15000)
    p.fill(20000, 1.0)
    p.fill(-1, 1.0)
    assert sum(p.counts) == 0
    assert p.overflow == 1
    assert p.underflow == 1


def test_profile_to_dict():
    p = Profile1D(2, 0.0, 2.0, name="prof")
    p.fill(1.5, 4.0)
    data = p.to_dict()
    assert data["means"] == [p.mean(0), p.mean(1)]
    assert data["counts"] == p.counts
    assert data["name"] == "prof"


def test_labelled_counts_sorted():
    c = LabelledCounts()
    for label in ["211", "211", "2212", "211", "2212", "111"]:
        c.fill(label)
    ordered = c.sorted_by_count()
    assert [label for label, _ in ordered] == ["211", "2212", "111"]
    counts = [count for _, count in ordered]
    assert counts == sorted(counts, reverse=True)


def test_labelled_counts_drop_non_positive():
    c = LabelledCounts()
    c.fill("a", 1.0)
    c.fill("b", 0.0)
    c.fill("c", -2.0)
    assert c.sorted_by_count() == [("a", 1.0)]


def test_labelled_counts_ties_keep_first_seen_order():
    c = LabelledCounts()
    c.fill("x")
    c.fill("y")
    assert c.sorted_by_count() == [("x", 1.0), ("y", 1.0)]