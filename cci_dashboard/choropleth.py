import plotly.graph_objects as go

from . import settings
from .binning import BinDefinition

GEO_LAYOUT = dict(
    projection=dict(type="natural earth"),
    showland=True,
    landcolor="lightgrey",
    showframe=False,
)
BORDER = dict(line=dict(color="black", width=0.3))


def blank_map(title: str = "No data for selected filters") -> go.Figure:
    fig = go.Figure(go.Scattergeo())
    fig.update_layout(template="plotly_white", title=title, geo=GEO_LAYOUT,
                      margin=dict(l=0, r=0, t=60, b=0))
    return fig


def bin_indices(labels, bins: BinDefinition):
    """Bin labels (or None) -> bin positions (or None)."""
    pos = {lab: i for i, lab in enumerate(bins.labels)}
    return [pos.get(lab) if lab else None for lab in labels]


def make_category_choropleth(locations,
                             indices,
                             hover_text,
                             bins: BinDefinition,
                             title: str,
                             legend_title: str | None = None,
                             missing_color: str = settings.MISSING_COLOR) -> go.Figure:
    locations = list(locations)
    indices = list(indices)
    hover_text = list(hover_text)
    if not locations:
        return blank_map()

    binned = [k for k, z in enumerate(indices) if z is not None]
    missing = [k for k, z in enumerate(indices) if z is None]

    fig = go.Figure()
    fig.add_trace(go.Choropleth(
        locationmode="ISO-3",
        locations=[locations[k] for k in binned],
        z=[indices[k] for k in binned],
        text=[hover_text[k] for k in binned],
        hovertemplate="%{text}<extra></extra>",
        zmin=0,
        zmax=len(bins) - 1,
        colorscale=bins.colorscale(),
        showscale=False,
        marker=BORDER,
        name="binned",
    ))

    # entities with no bin get the neutral colour, but keep their hover
    if missing:
        fig.add_trace(go.Choropleth(
            locationmode="ISO-3",
            locations=[locations[k] for k in missing],
            z=[0] * len(missing),
            text=[hover_text[k] for k in missing],
            hovertemplate="%{text}<extra></extra>",
            colorscale=[[0, missing_color], [1, missing_color]],
            showscale=False,
            marker=BORDER,
            name="missing",
        ))

    # legend swatches; choropleth traces have no categorical legend
    swatches = list(bins.colour_map().items()) + [("No data", missing_color)]
    for label, color in swatches:
        fig.add_trace(go.Scattergeo(
            lon=[None], lat=[None],
            mode="markers",
            marker=dict(size=11, symbol="square", color=color, line=dict(width=0.5, color="black")),
            name=label,
            showlegend=True,
            hoverinfo="skip",
        ))

    legend = dict(orientation="v", x=0.0, y=0.5, bgcolor="rgba(255,255,255,0.8)", font=dict(size=10))
    if legend_title:
        legend["title"] = dict(text=legend_title)

    fig.update_layout(
        template="plotly_white",
        title=title,
        title_font=dict(size=18),
        margin=dict(l=0, r=0, t=60, b=0),
        geo=GEO_LAYOUT,
        legend=legend,
    )
    return fig
