# app.py: Dash app for CSCC, carbon fluxes, CCI and bilateral flows per hectare

import argparse
import logging

from dash import Dash, dcc, html, Input, Output
from dash.exceptions import PreventUpdate

from . import settings
from .bilateral_map import make_bilateral_map
from .cci_map import make_cci_map, show_net_hint
from .cscc_map import make_cscc_map
from .data_prep import DataLoadError, DashboardData, load_all_data
from .flux_map import make_flux_map
from .records import build_per_ha_lookup, build_sink_options
from .widgets import PLACEHOLDER, ci_table, ci_table_rows, cscc_metric, per_ha_metrics, placeholder_rows

logger = logging.getLogger(__name__)

METRIC_IDS = ["m-glob", "m-dom", "m-out", "m-in", "m-net"]
GRAPH_STYLE = {"width": "100%", "height": "68vh"}
GRAPH_CONFIG = {"displayModeBar": False, "responsive": True}
HINT_STYLE = {"marginTop":"8px","fontSize":"0.85rem","opacity":0.7}


# -------------------------
# Panel updates (callback bodies)
# -------------------------
def update_cscc_panel(data: DashboardData, scenario):
    rows = data.scenario(scenario)
    if rows is None:
        raise PreventUpdate
    return cscc_metric(rows), make_cscc_map(rows, settings.SCENARIO_LABELS[scenario])


def update_flux_panel(data: DashboardData, flux_key):
    fig = make_flux_map(data.baseline, flux_key)
    if fig is None:
        raise PreventUpdate
    return fig


def update_cci_panel(data: DashboardData, flux_key, measure_key):
    fig = make_cci_map(data.baseline, flux_key or settings.DEFAULT_FLUX,
                       measure_key or settings.DEFAULT_CCI_MEASURE)
    if fig is None:
        raise PreventUpdate
    hint_style = {**HINT_STYLE, "display": "block" if show_net_hint(measure_key) else "none"}
    return fig, hint_style


def update_sink_panel(data: DashboardData, lookup, sink_iso):
    if not sink_iso:
        raise PreventUpdate
    metrics = per_ha_metrics(lookup, sink_iso)
    return (*metrics, ci_table_rows(lookup, sink_iso), make_bilateral_map(data.baseline, data.bilat, sink_iso))


# -------------------------
# Layout
# -------------------------
#wrapper for control cards
def control_card(children):
    return html.Div(
        children,
        style={
            "background":"#fff","border":"1px solid #e9ecef","borderRadius":"12px",
            "padding":"14px","boxShadow":"0 2px 8px rgba(0,0,0,0.04)"
        }
    )


def panel(controls, graph_id, extra=None):
    body = [dcc.Graph(id=graph_id, config=GRAPH_CONFIG, style=GRAPH_STYLE)]
    if extra is not None:
        body = [extra] + body
    return html.Div(
        [control_card(controls), control_card(body)],
        style={
            "display":"grid",
            "gridTemplateColumns":"minmax(240px, 1fr) 3fr",
            "gap":"14px",
            "margin":"14px 0 18px 0"
        }
    )


def metric_tile(label, tile_id):
    return html.Div(
        [html.Div(label, style={"fontSize":"0.8rem","opacity":0.7}),
         html.Div(PLACEHOLDER, id=tile_id, style={"fontSize":"1.3rem","fontWeight":600})],
        style={"padding":"8px 10px","border":"1px solid #e9ecef","borderRadius":"8px"}
    )


def build_layout(sink_options):
    default_sink = sink_options[0][0] if sink_options else None

    part1 = panel(
        [
            html.Div("Discounting scenario"),
            dcc.RadioItems(
                id="ctl-scenario",
                options=[{"label": lab, "value": key} for key, lab in settings.SCENARIO_LABELS.items()],
                value=settings.DEFAULT_SCENARIO,
                labelStyle={"display":"block"}
            ),
        ],
        "fig-cscc",
        extra=html.Div(id="cscc-metric", style={"marginBottom":"8px"}),
    )

    part2 = panel(
        [
            html.Div("Flux"),
            dcc.Dropdown(
                id="ctl-flux",
                options=[{"label": cfg.label, "value": key} for key, cfg in settings.FLUX_CONFIG.items()],
                value=settings.DEFAULT_FLUX,
                clearable=False
            ),
        ],
        "fig-flux",
    )

    part3 = panel(
        [
            html.Div("Flux"),
            dcc.Dropdown(
                id="ctl-cci-flux",
                options=[{"label": lab, "value": key} for key, lab in settings.CCI_FLUX_LABELS.items()],
                value=settings.DEFAULT_FLUX,
                clearable=False
            ),
            html.Div("Measure", style={"marginTop":"10px"}),
            dcc.Dropdown(
                id="ctl-cci-measure",
                options=[{"label": lab, "value": key} for key, lab in settings.CCI_MEASURE_LABELS.items()],
                value=settings.DEFAULT_CCI_MEASURE,
                clearable=False
            ),
            html.Div(
                "Positive balance: the country's flux imposes more impacts abroad than it receives.",
                id="cci-hint",
                style={**HINT_STYLE, "display":"none"}
            ),
        ],
        "fig-cci",
    )

    part4 = panel(
        [
            html.Div("Sink country"),
            dcc.Dropdown(
                id="ctl-sink",
                options=[{"label": name, "value": iso} for iso, name in sink_options],
                value=default_sink,
                clearable=False
            ),
            html.Div("Per-hectare CCI of the natural land sink (US$/ha/yr)",
                     style={"marginTop":"12px","fontSize":"0.9rem"}),
            html.Div(
                [metric_tile(name, tile_id) for (_, name), tile_id in zip(settings.PER_HA_ROWS, METRIC_IDS)],
                style={"display":"grid","gridTemplateColumns":"1fr 1fr","gap":"8px","marginTop":"6px"}
            ),
            html.Div(ci_table(placeholder_rows()), style={"marginTop":"12px"}),
        ],
        "fig-bilateral",
    )

    return html.Div(
        [
            html.H2(settings.APP_TITLE, style={"margin":"10px 0 8px 0"}),
            html.Div("Country-level social cost of carbon, carbon fluxes and their transboundary impacts."),
            dcc.Tabs(
                id="nav-tabs",
                value="part1",
                children=[
                    dcc.Tab(label="I. Social cost of carbon", value="part1", children=part1),
                    dcc.Tab(label="II. Carbon fluxes", value="part2", children=part2),
                    dcc.Tab(label="III. Carbon-cycle impacts", value="part3", children=part3),
                    dcc.Tab(label="IV. Flows per hectare", value="part4", children=part4),
                ],
            ),
        ],
        style={"maxWidth":"1300px","margin":"0 auto","padding":"12px"}
    )


def error_layout(message):
    return html.Div(
        [html.H2(settings.APP_TITLE), control_card(html.Div(message, id="load-error"))],
        style={"maxWidth":"1300px","margin":"0 auto","padding":"12px"}
    )


# -------------------------
# Callbacks
# -------------------------
def register_callbacks(app: Dash, data: DashboardData, lookup) -> None:
    @app.callback(
        Output("cscc-metric","children"),
        Output("fig-cscc","figure"),
        Input("ctl-scenario","value"),
    )
    def _update_cscc(scenario):
        return update_cscc_panel(data, scenario)

    @app.callback(Output("fig-flux","figure"), Input("ctl-flux","value"))
    def _update_flux(flux_key):
        return update_flux_panel(data, flux_key)

    @app.callback(
        Output("fig-cci","figure"),
        Output("cci-hint","style"),
        Input("ctl-cci-flux","value"),
        Input("ctl-cci-measure","value"),
    )
    def _update_cci(flux_key, measure_key):
        return update_cci_panel(data, flux_key, measure_key)

    @app.callback(
        *[Output(tile_id, "children") for tile_id in METRIC_IDS],
        Output("ci-table-body","children"),
        Output("fig-bilateral","figure"),
        Input("ctl-sink","value"),
    )
    def _update_sink(sink_iso):
        return update_sink_panel(data, lookup, sink_iso)


def create_app(data: DashboardData | None = None, base_url: str | None = None) -> Dash:
    """Build the Dash app; loads the datasets unless ``data`` is given."""
    app = Dash(__name__)
    app.title = settings.APP_TITLE

    if data is None:
        try:
            data = load_all_data(base_url)
        except DataLoadError:
            logger.exception("dataset load failed")
            app.layout = error_layout("Failed to load data. Check the server log for details.")
            return app

    lookup = build_per_ha_lookup(data.baseline)
    sink_options = build_sink_options(data.bilat)
    logger.info("per-ha lookup: %d countries, %d sink options", len(lookup), len(sink_options))

    app.layout = build_layout(sink_options)
    register_callbacks(app, data, lookup)
    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description=settings.APP_TITLE)
    parser.add_argument("--data", default=None, help="directory or URL prefix holding the CSV files")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(base_url=args.data)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
