import logging
import unicodedata

import pandas as pd

from . import settings
from .binning import BinDefinition, bin_label
from .data_prep import country_rows, display_name, format_ci, is_missing, parse_number, to_numeric

logger = logging.getLogger(__name__)


def assemble_records(rows: pd.DataFrame,
                     value_col: str,
                     bins: BinDefinition,
                     lower_col: str | None = None,
                     upper_col: str | None = None) -> pd.DataFrame:
    """Copy of ``rows`` with ``_value``, ``_ci`` and ``_bin`` added.

    ``_ci`` is only filled when both bound columns are given and both values
    are present; ``_bin`` is None for a missing value.
    """
    out = rows.copy()
    out["_value"] = to_numeric(out[value_col])

    if lower_col and upper_col:
        lows = to_numeric(out[lower_col])
        highs = to_numeric(out[upper_col])
        out["_ci"] = [format_ci(lo, hi) for lo, hi in zip(lows, highs)]
    else:
        out["_ci"] = ""

    # object dtype, so a missing bin stays None
    out["_bin"] = pd.Series([bin_label(v, bins) for v in out["_value"]], index=out.index, dtype=object)

    present = out["_value"].dropna()
    outside = int((~present.map(bins.covers)).sum()) if not present.empty else 0
    if outside:
        logger.warning("%d value(s) of %s fall outside the bin range, saturated into '%s'",
                       outside, value_col, bins.labels[-1])
    return out


# -------------------------
# Per-hectare normalisation
# -------------------------
def per_ha_value(value, area):
    v = parse_number(value)
    a = parse_number(area)
    if v is None or a is None or a <= 0:
        return None
    return (v / a) * settings.PER_HA_SCALE


def assemble_per_ha_records(rows: pd.DataFrame,
                            value_cols,
                            area_col: str = "Forest_ha") -> pd.DataFrame:
    #rows without a usable area are dropped, not kept as NA
    area = to_numeric(rows[area_col])
    keep = area.notna() & (area > 0)
    out = rows[keep].copy()
    out[area_col] = area[keep]
    for col in value_cols:
        out[col] = [per_ha_value(v, a) for v, a in zip(out[col], out[area_col])]
        out[col] = out[col].astype(float)
    return out


# -------------------------
# Lookups
# -------------------------
def build_per_ha_lookup(baseline: pd.DataFrame, flux_key: str = settings.PER_HA_FLUX) -> pd.DataFrame:
    """Per-hectare CCI medians and intervals keyed by iso code."""
    source_cols = {m: settings.cci_columns(flux_key, m) for m, _ in settings.PER_HA_ROWS}

    value_cols = [c for cols in source_cols.values() for c in cols]
    rows = country_rows(baseline)
    per_ha = assemble_per_ha_records(rows, value_cols, area_col="Forest_ha")

    lookup = pd.DataFrame({
        "iso": per_ha["iso"],
        "Country": [display_name(r) for _, r in per_ha.iterrows()],
        "Forest_ha": per_ha["Forest_ha"],
    })
    for m, cols in source_cols.items():
        lookup[f"{m}_median"] = per_ha[cols.median]
        lookup[f"{m}_q17"] = per_ha[cols.q17]
        lookup[f"{m}_q83"] = per_ha[cols.q83]
        lookup[f"{m}_ci"] = [format_ci(lo, hi) for lo, hi in zip(per_ha[cols.q17], per_ha[cols.q83])]

    # a repeated code keeps its last row
    lookup = lookup.drop_duplicates(subset="iso", keep="last")
    return lookup.set_index("iso", drop=False)


def _collation_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def build_sink_options(bilat: pd.DataFrame) -> list[tuple[str, str]]:
    """Distinct (sink_iso, sink_country) pairs, sorted by country name."""
    seen = {}
    for iso, name in zip(bilat["sink_iso"], bilat["sink_country"]):
        if is_missing(iso) or is_missing(name) or not iso or not name:
            continue
        if iso not in seen:
            seen[iso] = name

    return sorted(seen.items(), key=lambda kv: (_collation_key(kv[1]), kv[1], kv[0]))
