import pandas as pd
from dash import html

from . import settings
from .data_prep import fmt2, parse_number

PLACEHOLDER = "—"


# -------------------------
# Part I summary line
# -------------------------
def global_summary(rows: pd.DataFrame):
    """(median, q17, q83) from the world 'Total' row, or None if there is no such row."""
    total = rows[rows["iso"] == settings.TOTAL_CODE]
    if total.empty:
        return None
    r = total.iloc[0]
    return parse_number(r["CSCC_median"]), parse_number(r["CSCC_q17"]), parse_number(r["CSCC_q83"])


def cscc_metric(rows: pd.DataFrame):
    summary = global_summary(rows)
    if summary is None:
        return "Global CSCC summary not found (missing iso == 'Total')."
    med, q17, q83 = summary
    return [
        html.Strong("Median SCC: "),
        html.Strong(f"USD {fmt2(med)} / tCO₂"),
        f" (66% CI: [{fmt2(q17)}, {fmt2(q83)}])",
    ]


# -------------------------
# Part IV readouts
# -------------------------
def per_ha_metrics(lookup: pd.DataFrame, sink_iso) -> list[str]:
    """Five per-hectare medians as text, dashes when the country has no entry."""
    if sink_iso not in lookup.index:
        return [PLACEHOLDER] * len(settings.PER_HA_ROWS)
    row = lookup.loc[sink_iso]
    return [fmt2(row[f"{m}_median"]) for m, _ in settings.PER_HA_ROWS]


def placeholder_rows() -> list:
    return [html.Tr(html.Td("Select a sink country to populate this table.", colSpan=3, className="muted"))]


def ci_table_rows(lookup: pd.DataFrame, sink_iso) -> list:
    if sink_iso not in lookup.index:
        return placeholder_rows()
    row = lookup.loc[sink_iso]
    out = []
    for m, name in settings.PER_HA_ROWS:
        out.append(html.Tr([
            html.Td(name),
            html.Td(fmt2(row[f"{m}_median"])),
            html.Td(row[f"{m}_ci"]),
        ]))
    return out


def ci_table(rows) -> html.Table:
    return html.Table(
        [
            html.Thead(html.Tr([html.Th("Measure"), html.Th("Median (US$/ha/yr)"), html.Th("66% CI")])),
            html.Tbody(rows, id="ci-table-body"),
        ],
        id="ci-table",
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": "0.9rem"},
    )
