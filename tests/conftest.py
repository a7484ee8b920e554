import pandas as pd
import pytest

from cci_dashboard import settings
from cci_dashboard.data_prep import DashboardData

BASELINE_COLUMNS = list(dict.fromkeys(settings.REQUIRED_COLUMNS["baseline"]))
BILAT_COLUMNS = settings.REQUIRED_COLUMNS["bilat"]


def baseline_row(iso, country, **values):
    #every numeric column defaults to "1"
    row = {c: "1" for c in BASELINE_COLUMNS}
    row.update(iso=iso, Country=country)
    row.update({k: str(v) for k, v in values.items()})
    return row


def bilat_row(sink_iso, sink_country, target_iso, forest_ha, mean, q17="", q83=""):
    return {
        "sink_iso": sink_iso, "sink_country": sink_country, "target_iso": target_iso,
        "forest_ha": forest_ha, "flow_per_ha_mean": mean,
        "flow_per_ha_q17": q17, "flow_per_ha_q83": q83,
    }


@pytest.fixture
def baseline():
    return pd.DataFrame([
        baseline_row("USA", "United States",
                     CSCC_median="2.5", CSCC_q17="1.005", CSCC_q83="2.3",
                     Forest_ha="2e8", Fa_tf_mean="-0.2", Fa_tf_std="0.0456",
                     Fa_tf_Wglob_median="4", Fa_tf_Wglob_q17="2", Fa_tf_Wglob_q83="6",
                     Fa_tf_Wnet_median=""),
        baseline_row("BRA", "Brazil",
                     CSCC_median="0", CSCC_q17="", CSCC_q83="1",
                     Forest_ha="5e8", Fa_tf_mean="0"),
        baseline_row("FRA", "France", CSCC_median="n/a", Forest_ha="0", Fa_tf_mean="abc"),
        baseline_row("Total", "World", CSCC_median="10.5", CSCC_q17="5", CSCC_q83="15.25"),
        baseline_row("ATA", "Antarctica"),
        baseline_row("GRL", "Greenland"),
        baseline_row("IND", "India", CSCC_median="25", Forest_ha=""),
    ], columns=BASELINE_COLUMNS)


@pytest.fixture
def scenario_rows():
    cols = ["iso", "Country", "CSCC_median", "CSCC_q17", "CSCC_q83"]
    return pd.DataFrame([
        ["USA", "United States", "4", "3", "5"],
        ["BRA", "Brazil", "-2", "-3", "-1"],
    ], columns=cols)


@pytest.fixture
def bilat():
    return pd.DataFrame([
        bilat_row("BRA", "Brazil", "USA", "5e8", "0.1", "0.05", "0.2"),
        bilat_row("BRA", "Brasil", "IND", "5e8", "0", "", "1"),
        bilat_row("BRA", "Brazil", "BRA", "5e8", "350", "300", "400"),
        bilat_row("USA", "United States", "BRA", "2e8", "-1"),
        bilat_row("CIV", "Côte d'Ivoire", "USA", "1e7", "2"),
        bilat_row("", "Nowhere", "USA", "1e7", "2"),
        bilat_row("COL", "Colombia", "USA", "6e7", "0.5"),
        bilat_row("AUT", "austria", "USA", "4e6", "1"),
    ], columns=BILAT_COLUMNS)


@pytest.fixture
def data(baseline, scenario_rows, bilat):
    return DashboardData(
        baseline=baseline,
        dr3=scenario_rows,
        dr5=scenario_rows.copy(),
        endo=scenario_rows.copy(),
        bilat=bilat,
    )
