import logging

import pandas as pd
import plotly.graph_objects as go

from . import settings
from .binning import CCI_BINS
from .choropleth import bin_indices, make_category_choropleth
from .data_prep import country_rows, display_name, fmt2
from .records import assemble_records

logger = logging.getLogger(__name__)


#Part III. Carbon-cycle impacts by flux and measure
def make_cci_map(rows: pd.DataFrame, flux_key: str, measure_key: str) -> go.Figure | None:
    cols = settings.cci_columns(flux_key, measure_key)
    if cols is None:
        return None
    flux_label = settings.CCI_FLUX_LABELS[flux_key]
    measure_label = settings.CCI_MEASURE_LABELS[measure_key]

    mapped = assemble_records(country_rows(rows), cols.median, CCI_BINS,
                              lower_col=cols.q17, upper_col=cols.q83)
    logger.debug("cci map: %s/%s, %d countries", flux_key, measure_key, len(mapped))

    hover = [
        f"<b>{display_name(r)}</b><br>{measure_label}: {fmt2(r['_value'])} US$ bn/yr"
        f"<br>66% CI: {r['_ci']}"
        for _, r in mapped.iterrows()
    ]
    return make_category_choropleth(
        mapped["iso"],
        bin_indices(mapped["_bin"], CCI_BINS),
        hover,
        CCI_BINS,
        title=f"{flux_label} — {measure_label} (US$ billion/yr)",
        legend_title="US$ bn/yr",
    )


def show_net_hint(measure_key) -> bool:
    return measure_key == "Wnet"
