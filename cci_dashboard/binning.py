from dataclasses import dataclass

import numpy as np

from .data_prep import is_missing


@dataclass(frozen=True)
class BinDefinition:
    """Ordered intervals with a label and colour each.

    Intervals are right-closed, ``edges[i] < v <= edges[i + 1]``. With
    ``include_lowest`` the first interval also takes its lower edge.
    """
    edges: tuple
    labels: tuple
    colors: tuple
    include_lowest: bool = False

    def __post_init__(self):
        if len(self.edges) != len(self.labels) + 1:
            raise ValueError("need exactly one more edge than labels")
        if len(self.colors) != len(self.labels):
            raise ValueError("need one colour per label")
        if len(set(self.labels)) != len(self.labels):
            raise ValueError("bin labels must be unique")
        if any(lo >= hi for lo, hi in zip(self.edges, self.edges[1:])):
            raise ValueError("bin edges must be strictly increasing")

    def __len__(self):
        return len(self.labels)

    def colour_map(self) -> dict:
        return dict(zip(self.labels, self.colors))

    def colorscale(self) -> list:
        #evenly spaced stops, one per bin index
        n = len(self.labels)
        return [[1.0 if n == 1 else i / (n - 1), c] for i, c in enumerate(self.colors)]

    def covers(self, v) -> bool:
        lo, hi = self.edges[0], self.edges[-1]
        above = v >= lo if self.include_lowest else v > lo
        return bool(above and v <= hi)


def bin_index(value, bins: BinDefinition):
    if is_missing(value):
        return None
    edges = bins.edges
    for i in range(len(edges) - 1):
        lo, hi = edges[i], edges[i + 1]
        if i == 0 and bins.include_lowest:
            inside = lo <= value <= hi
        else:
            inside = lo < value <= hi
        if inside:
            return i
    # saturate into the top bin
    return len(bins.labels) - 1


def bin_label(value, bins: BinDefinition):
    i = bin_index(value, bins)
    return None if i is None else bins.labels[i]


# -------------------------
# Families
# -------------------------
CSCC_BINS = BinDefinition(
    edges=(-np.inf, -3, -1, 0, 1, 3, 5, 10, 20, np.inf),
    labels=("< -3", "-3 to -1", "-1 to 0", "0 to 1", "1 to 3", "3 to 5", "5 to 10", "10 to 20", "> 20"),
    colors=("#214d8d", "#3d7cbd", "#97b9d6", "#fbd7c6", "#f38863", "#f26a44", "#e8452b", "#ce211a", "#a3241d"),
)

FLUX_BINS = BinDefinition(
    edges=(-np.inf, -0.1, -0.01, 0, 0.01, 0.1, 0.3, 0.5, 1, np.inf),
    labels=("< -0.1", "-0.1 to -0.01", "-0.01 to 0", "0 to 0.01", "0.01 to 0.1",
            "0.1 to 0.3", "0.3 to 0.5", "0.5 to 1", "> 1"),
    colors=("#116535", "#66bd63", "#a6d96a", "#ffe8a8", "#ffd27a", "#fdae61", "#f46d43", "#d73027", "#a3241d"),
)

CCI_BINS = BinDefinition(
    edges=(-np.inf, -100, -50, -20, -10, -1, 0, 1, 10, 20, 50, 100, np.inf),
    labels=("< -100", "-100 to -50", "-50 to -20", "-20 to -10", "-10 to -1", "-1 to 0",
            "0 to 1", "1 to 10", "10 to 20", "20 to 50", "50 to 100", "> 100"),
    colors=("#a3241d", "#ce211a", "#e8452b", "#f26a44", "#f38863", "#fbd7c6",
            "#c5d8e8", "#72aad6", "#4681c0", "#255596", "#163e75", "#10306d"),
)

# flows are non-negative, zero belongs in the first bin
FLOW_PER_HA_BINS = BinDefinition(
    edges=(0, 0.1, 0.5, 1, 3, 10, 30, 100, 300, np.inf),
    labels=("0–0.1", "0.1–0.5", "0.5–1", "1–3", "3–10", "10–30", "30–100", "100–300", ">300"),
    colors=("#eef4fb", "#d6e6f6", "#bcd7ee", "#9ecae1", "#72aad6", "#4681c0", "#255596", "#163e75", "#10306d"),
    include_lowest=True,
)
