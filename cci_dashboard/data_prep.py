import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

import numpy as np
import pandas as pd

from . import settings

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """A source dataset could not be read or is missing required columns."""


# -------------------------
# Cell coercion + formatting
# -------------------------
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_RADIX = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)


def _parse_text(s: str):
    s = s.strip()
    if not s:
        # a blank-but-not-empty cell reads as zero
        return 0.0
    try:
        if _DECIMAL.fullmatch(s):
            return float(s)
        if _RADIX.fullmatch(s):
            return float(int(s, 0))
    except OverflowError:
        return None
    # "Infinity", "NaN", "1_000", non-ASCII digits...
    return None


def parse_number(x):
    """Finite float for a cell value, None for an empty, unparseable or non-finite one.

    Only ``None`` and the empty string count as absent. Surrounding whitespace
    is ignored and a blank cell is zero. Accepted text is ASCII decimals
    with an optional exponent, or unsigned ``0x``/``0o``/``0b`` integers.
    """
    if x is None or (isinstance(x, str) and x == ""):
        return None
    if isinstance(x, str):
        v = _parse_text(x)
    elif isinstance(x, (int, float, np.number)) and not isinstance(x, bool):
        v = float(x)
    else:
        return None
    if v is None or not np.isfinite(v):
        return None
    return v


def to_numeric(series: pd.Series) -> pd.Series:
    #missing -> NaN
    return series.map(parse_number).astype(float)


def is_missing(v) -> bool:
    return v is None or pd.isna(v)


_WIDE = Context(prec=400)


def fmt_fixed(x, digits: int = 2) -> str:
    # round half up on the shortest repr, so 1.005 -> 1.01
    v = parse_number(x)
    if v is None:
        return "NA"
    v = v + 0.0  # -0.0 -> 0.0
    q = Decimal(1).scaleb(-digits)
    return str(Decimal(repr(v)).quantize(q, rounding=ROUND_HALF_UP, context=_WIDE))


def fmt2(x) -> str:
    return fmt_fixed(x, 2)


def fmt3(x) -> str:
    return fmt_fixed(x, 3)


def format_ci(lower, upper) -> str:
    if is_missing(lower) or is_missing(upper):
        return ""
    return f"[{fmt2(lower)}, {fmt2(upper)}]"


# -------------------------
# Row filter
# -------------------------
def country_rows(df: pd.DataFrame, iso_col: str = "iso") -> pd.DataFrame:
    keep = ~df[iso_col].isin(list(settings.EXCLUDED_CODES))
    return df[keep]


def display_name(row, name_col: str = "Country", iso_col: str = "iso") -> str:
    name = row.get(name_col)
    if name is None or (isinstance(name, str) and not name.strip()) or pd.isna(name):
        return row[iso_col]
    return name


# -------------------------
# Loading
# -------------------------
@dataclass(frozen=True)
class DashboardData:
    """The five source tables, loaded once and only read afterwards."""
    baseline: pd.DataFrame
    dr3: pd.DataFrame
    dr5: pd.DataFrame
    endo: pd.DataFrame
    bilat: pd.DataFrame

    def scenario(self, key):
        if key not in settings.SCENARIO_LABELS:
            return None
        return getattr(self, key)


def dataset_url(base: str, filename: str) -> str:
    return f"{base.rstrip('/')}/{filename}"


def load_csv(url: str, name: str = "") -> pd.DataFrame:
    # every cell stays text, blanks stay ""
    try:
        df = pd.read_csv(url, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except Exception as exc:
        raise DataLoadError(f"could not load {name or url}: {exc}") from exc

    required = settings.REQUIRED_COLUMNS.get(name, [])
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataLoadError(f"{name or url} is missing columns: {', '.join(missing)}")

    logger.info("loaded %s (%d rows) from %s", name or url, len(df), url)
    return df


def load_all_data(base_url: str | None = None) -> DashboardData:
    """Fetch all datasets in parallel; any single failure fails the whole load."""
    base_url = base_url or settings.DATA_URL
    names = list(settings.DATASET_FILES)

    with ThreadPoolExecutor(max_workers=len(names)) as pool:
        futures = {
            name: pool.submit(load_csv, dataset_url(base_url, settings.DATASET_FILES[name]), name)
            for name in names
        }
        frames = {name: fut.result() for name, fut in futures.items()}

    return DashboardData(**frames)
