import logging

import pandas as pd
import plotly.graph_objects as go

from .binning import FLOW_PER_HA_BINS
from .choropleth import bin_indices, make_category_choropleth
from .data_prep import country_rows, display_name, fmt2, parse_number
from .records import assemble_records

logger = logging.getLogger(__name__)

FLOW_COLS = ["flow_per_ha_mean", "flow_per_ha_q17", "flow_per_ha_q83"]
TRANSPARENT = "rgba(0,0,0,0)"


#Part IV. Bilateral flows per hectare into one sink country
def sink_info(bilat: pd.DataFrame, sink_iso: str):
    """(display name, forest area in Mha or None) taken from the sink's first row."""
    sub = bilat[bilat["sink_iso"] == sink_iso]
    if sub.empty:
        return sink_iso, None
    first = sub.iloc[0]
    name = first["sink_country"] or sink_iso
    forest_ha = parse_number(first["forest_ha"])
    forest_mha = forest_ha / 1e6 if forest_ha and forest_ha > 0 else None
    return name, forest_mha


def compute_bilateral_records(baseline: pd.DataFrame, bilat: pd.DataFrame, sink_iso: str) -> pd.DataFrame:
    base = country_rows(baseline)
    countries = pd.DataFrame({
        "iso": base["iso"].tolist(),
        "Country": [display_name(r) for _, r in base.iterrows()],
    })

    # one flow per source country, a repeated target keeps its last row
    flows = (
        bilat.loc[bilat["sink_iso"] == sink_iso, ["target_iso"] + FLOW_COLS]
             .drop_duplicates(subset="target_iso", keep="last")
    )
    joined = countries.merge(flows, how="left", left_on="iso", right_on="target_iso")
    joined = joined.drop(columns="target_iso")

    mapped = assemble_records(joined, "flow_per_ha_mean", FLOW_PER_HA_BINS,
                              lower_col="flow_per_ha_q17", upper_col="flow_per_ha_q83")
    mapped["is_sink"] = mapped["iso"] == sink_iso
    return mapped


def make_bilateral_map(baseline: pd.DataFrame, bilat: pd.DataFrame, sink_iso: str) -> go.Figure:
    mapped = compute_bilateral_records(baseline, bilat, sink_iso)
    sink_name, forest_mha = sink_info(bilat, sink_iso)
    logger.debug("bilateral map: sink %s, %d flows", sink_iso, int(mapped["_value"].notna().sum()))

    hover = [
        f"<b>{r['Country']}</b><br>US$/ha/yr: {fmt2(r['_value'])}<br>66% CI: {r['_ci']}"
        for _, r in mapped.iterrows()
    ]
    fig = make_category_choropleth(
        mapped["iso"],
        bin_indices(mapped["_bin"], FLOW_PER_HA_BINS),
        hover,
        FLOW_PER_HA_BINS,
        title=f"Bilateral CCI flows per hectare to {sink_name}'s Natural Land Sink (US$/ha/yr)",
        legend_title="US$/ha/yr",
    )

    # red outline over the sink
    fig.add_trace(go.Choropleth(
        locationmode="ISO-3",
        locations=[sink_iso],
        z=[0],
        colorscale=[[0, TRANSPARENT], [1, TRANSPARENT]],
        showscale=False,
        showlegend=False,
        marker=dict(line=dict(color="red", width=3)),
        hovertemplate=f"<b>{sink_name}</b><br>Forest area: {fmt2(forest_mha)} Mha<extra></extra>",
        name="sink",
    ))
    return fig
