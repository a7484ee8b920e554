import numpy as np
import pytest

from cci_dashboard.binning import (
    CCI_BINS,
    CSCC_BINS,
    FLOW_PER_HA_BINS,
    FLUX_BINS,
    BinDefinition,
    bin_index,
    bin_label,
)

ALL_BINS = [CSCC_BINS, FLUX_BINS, CCI_BINS, FLOW_PER_HA_BINS]


def test_family_sizes():
    assert [len(b) for b in ALL_BINS] == [9, 9, 12, 9]


def test_cscc_examples():
    assert bin_label(0, CSCC_BINS) == "-1 to 0"
    assert bin_label(0.0001, CSCC_BINS) == "0 to 1"
    assert bin_label(-3, CSCC_BINS) == "< -3"
    assert bin_label(20, CSCC_BINS) == "10 to 20"
    assert bin_label(1e6, CSCC_BINS) == "> 20"


def test_flow_per_ha_includes_lowest_edge():
    assert bin_label(0, FLOW_PER_HA_BINS) == "0–0.1"
    assert bin_label(0.1, FLOW_PER_HA_BINS) == "0–0.1"
    assert bin_label(0.1000001, FLOW_PER_HA_BINS) == "0.1–0.5"
    assert bin_label(300, FLOW_PER_HA_BINS) == "100–300"
    assert bin_label(300.5, FLOW_PER_HA_BINS) == ">300"


def test_right_closed_families_exclude_lowest_finite_edge():
    # 0 is an interior edge everywhere except the flow family
    assert bin_label(0, FLUX_BINS) == "-0.01 to 0"
    assert bin_label(0, CCI_BINS) == "-1 to 0"


@pytest.mark.parametrize("bins", ALL_BINS)
def test_interior_edges_belong_to_the_interval_below(bins):
    for i, edge in enumerate(bins.edges[1:-1]):
        assert bin_index(edge, bins) == i
        assert bin_index(np.nextafter(edge, np.inf), bins) == i + 1


@pytest.mark.parametrize("bins", ALL_BINS)
def test_every_value_lands_in_exactly_one_interval(bins):
    rng = np.random.default_rng(7)
    finite = [e for e in bins.edges if np.isfinite(e)]
    values = list(rng.uniform(min(finite) - 50, max(finite) + 50, size=500)) + finite
    for v in values:
        if not bins.covers(v):
            continue
        hits = []
        for i, (lo, hi) in enumerate(zip(bins.edges, bins.edges[1:])):
            lower_ok = v >= lo if (i == 0 and bins.include_lowest) else v > lo
            if lower_ok and v <= hi:
                hits.append(i)
        assert hits == [bin_index(v, bins)]


@pytest.mark.parametrize("bins", ALL_BINS)
def test_missing_maps_to_no_bin(bins):
    assert bin_index(None, bins) is None
    assert bin_label(float("nan"), bins) is None


def test_out_of_range_saturates_to_top_bin():
    assert not FLOW_PER_HA_BINS.covers(-1)
    assert bin_label(-1, FLOW_PER_HA_BINS) == ">300"


def test_colour_scale_is_evenly_spaced():
    scale = CCI_BINS.colorscale()
    assert scale[0] == [0.0, CCI_BINS.colors[0]]
    assert scale[-1] == [1.0, CCI_BINS.colors[-1]]
    assert len(scale) == 12
    assert CSCC_BINS.colour_map()["0 to 1"] == "#fbd7c6"


def test_single_bin_colour_scale():
    one = BinDefinition(edges=(0, 1), labels=("all",), colors=("#000",))
    assert one.colorscale() == [[1.0, "#000"]]


@pytest.mark.parametrize("kwargs", [
    dict(edges=(0, 1, 1), labels=("a", "b"), colors=("#1", "#2")),
    dict(edges=(2, 1), labels=("a",), colors=("#1",)),
    dict(edges=(0, 1, 2), labels=("a",), colors=("#1",)),
    dict(edges=(0, 1, 2), labels=("a", "b"), colors=("#1",)),
    dict(edges=(0, 1, 2), labels=("a", "a"), colors=("#1", "#2")),
])
def test_bad_definitions_are_rejected(kwargs):
    with pytest.raises(ValueError):
        BinDefinition(**kwargs)
