import logging

import pandas as pd
import plotly.graph_objects as go

from . import settings
from .binning import FLUX_BINS
from .choropleth import bin_indices, make_category_choropleth
from .data_prep import country_rows, display_name, fmt3
from .records import assemble_records

logger = logging.getLogger(__name__)


#Part II. Carbon fluxes
def make_flux_map(rows: pd.DataFrame, flux_key: str) -> go.Figure | None:
    cfg = settings.FLUX_CONFIG.get(flux_key)
    if cfg is None:
        return None

    mapped = assemble_records(country_rows(rows), cfg.mean, FLUX_BINS)
    logger.debug("flux map: %s, %d countries", flux_key, len(mapped))

    hover = [
        f"<b>{display_name(r)}</b><br>{cfg.label}: {fmt3(r['_value'])} GtC/yr"
        f"<br>Std Dev (GtC/yr): {fmt3(r[cfg.std])}"
        for _, r in mapped.iterrows()
    ]
    return make_category_choropleth(
        mapped["iso"],
        bin_indices(mapped["_bin"], FLUX_BINS),
        hover,
        FLUX_BINS,
        title=f"{cfg.label} (GtC/yr)",
        legend_title="GtC/yr",
    )
