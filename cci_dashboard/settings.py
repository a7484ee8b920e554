import os
from typing import NamedTuple

# -------------------------
# Data location
# -------------------------
# local directory or URL prefix (e.g. a raw GitHub folder)
DATA_URL = os.environ.get("CCI_DASHBOARD_DATA", "data")

DATASET_FILES = {
    "baseline": "final_with_forest_area.csv",
    "dr3":      "final_dr3.csv",
    "dr5":      "final_dr5.csv",
    "endo":     "final_ela_prtp.csv",
    "bilat":    "bilateral_flows_per_ha.csv",
}

APP_TITLE = "Carbon Fluxes and the Social Cost of Carbon"

# aggregate row + territories left off the maps
EXCLUDED_CODES = frozenset({"Total", "ATA", "GRL"})
TOTAL_CODE = "Total"

MISSING_COLOR = "lightgrey"

# -------------------------
# Part I: scenarios
# -------------------------
SCENARIO_LABELS = {
    "baseline": "2.5% (baseline)",
    "dr3":      "3%",
    "dr5":      "5%",
    "endo":     "Endogenous",
}
DEFAULT_SCENARIO = "baseline"

# -------------------------
# Part II: fluxes
# -------------------------
class FluxColumns(NamedTuple):
    mean: str
    std: str
    label: str


FLUX_CONFIG = {
    "Fa_tf":   FluxColumns("Fa_tf_mean", "Fa_tf_std", "Natural land sink"),
    "Fb":      FluxColumns("Fb_mean", "Fb_std", "Land-use change emissions"),
    "Fc":      FluxColumns("Fc_mean", "Fc_std", "Fossil fuel emissions"),
    "Fab_tf":  FluxColumns("Fab_tf_mean", "Fab_tf_std", "Net land flux"),
    "Fabc_tf": FluxColumns("Fabc_tf_mean", "Fabc_tf_std", "Net total flux"),
}
DEFAULT_FLUX = "Fa_tf"

# -------------------------
# Part III: carbon-cycle impacts (CCI)
# -------------------------
CCI_FLUX_LABELS = {key: cfg.label for key, cfg in FLUX_CONFIG.items()}

CCI_MEASURE_LABELS = {
    "Wglob": "Global CCI",
    "Wdom":  "Domestic CCI",
    "Wout":  "Outbound CCI",
    "Win":   "Inbound CCI",
    "Wnet":  "Balance of Transboundary CCI",
}
DEFAULT_CCI_MEASURE = "Wglob"


class CciColumns(NamedTuple):
    median: str
    q17: str
    q83: str


def _cci_columns(flux_key: str, measure_key: str) -> CciColumns:
    prefix = f"{flux_key}_{measure_key}"
    return CciColumns(f"{prefix}_median", f"{prefix}_q17", f"{prefix}_q83")


CCI_COLUMNS = {
    (flux_key, measure_key): _cci_columns(flux_key, measure_key)
    for flux_key in CCI_FLUX_LABELS
    for measure_key in CCI_MEASURE_LABELS
}


def cci_columns(flux_key, measure_key):
    """Column triple for a (flux, measure) pair, or None if not configured."""
    return CCI_COLUMNS.get((flux_key, measure_key))


# -------------------------
# Part IV: per-hectare metrics
# -------------------------
PER_HA_FLUX = "Fa_tf"
PER_HA_SCALE = 1e9
PER_HA_ROWS = [
    ("Wglob", "Global CCI"),
    ("Wdom",  "Domestic CCI"),
    ("Wout",  "Outbound CCI"),
    ("Win",   "Inbound CCI"),
    ("Wnet",  "Balance (Outbound − Inbound)"),
]

# -------------------------
# Columns every dataset must carry
# -------------------------
_CSCC_COLUMNS = ["iso", "Country", "CSCC_median", "CSCC_q17", "CSCC_q83"]

REQUIRED_COLUMNS = {
    "baseline": (
        _CSCC_COLUMNS
        + ["Forest_ha"]
        + [c for cfg in FLUX_CONFIG.values() for c in (cfg.mean, cfg.std)]
        + [c for cols in CCI_COLUMNS.values() for c in cols]
    ),
    "dr3":  _CSCC_COLUMNS,
    "dr5":  _CSCC_COLUMNS,
    "endo": _CSCC_COLUMNS,
    "bilat": [
        "sink_iso", "sink_country", "target_iso", "forest_ha",
        "flow_per_ha_mean", "flow_per_ha_q17", "flow_per_ha_q83",
    ],
}
