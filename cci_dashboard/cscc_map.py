import logging

import pandas as pd
import plotly.graph_objects as go

from .binning import CSCC_BINS
from .choropleth import bin_indices, make_category_choropleth
from .data_prep import country_rows, display_name, fmt2
from .records import assemble_records

logger = logging.getLogger(__name__)


#Part I. Country-level social cost of carbon
def compute_cscc_records(rows: pd.DataFrame) -> pd.DataFrame:
    return assemble_records(country_rows(rows), "CSCC_median", CSCC_BINS,
                            lower_col="CSCC_q17", upper_col="CSCC_q83")


def make_cscc_map(rows: pd.DataFrame, scenario_label: str) -> go.Figure:
    mapped = compute_cscc_records(rows)
    logger.debug("cscc map: %d countries, scenario %s", len(mapped), scenario_label)

    hover = [
        f"<b>{display_name(r)}</b><br>CSCC: {fmt2(r['_value'])}<br>66% CI: {r['_ci']}"
        for _, r in mapped.iterrows()
    ]
    return make_category_choropleth(
        mapped["iso"],
        bin_indices(mapped["_bin"], CSCC_BINS),
        hover,
        CSCC_BINS,
        title=f"CSCC median (US$/tCO₂) — {scenario_label} Discounting",
        legend_title="US$/tCO₂",
    )
