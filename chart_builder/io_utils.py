import logging
from pathlib import Path
from typing import Tuple

import numpy as np
import pandas as pd

import params
from .config import OUT_DIR, PLOTS_DIR
from .errors import LoadError
from .records import Record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("state", "sex", "type", "percent")


def ensure_dirs(out_dir: Path = OUT_DIR, png: bool = False):
    out_dir.mkdir(parents=True, exist_ok=True)
    if png:
        (out_dir / PLOTS_DIR.name).mkdir(parents=True, exist_ok=True)


def write_text(path: Path, text: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def read_table(path: Path) -> pd.DataFrame:
    """Read the raw CSV as strings with stripped header names and cells."""
    path = Path(path)
    if not path.exists():
        logger.error("CSV not found: %s", path)
        raise LoadError(f"CSV not found: {path}")
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error("Couldn't read %s: %s", path, e)
        raise LoadError(f"Couldn't read {path}: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df


def load_records(path: Path) -> Tuple[Record, ...]:
    """Load the drinking CSV (state, sex, type, percent) into Records.

    Percent is parsed from text once here; an empty or non-numeric percent
    is reported with its 1-based data row number.
    """
    df = read_table(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        logger.error("%s is missing columns: %s", path, missing)
        raise LoadError(f"{path} is missing columns: {', '.join(missing)}")

    percent = pd.to_numeric(df["percent"], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
    # percents are shares of adults: finite and not negative
    bad = np.flatnonzero(~np.isfinite(percent) | (percent < 0))
    if bad.size:
        row = int(bad[0])
        logger.error("%s: bad percent %r on row %d", path, df["percent"].iat[row], row + 1)
        raise LoadError(f"{path}: bad percent {df['percent'].iat[row]!r} on row {row + 1} ({bad.size} bad rows)")

    blank = df[list(REQUIRED_COLUMNS[:3])].eq("").any(axis=1).to_numpy()
    if blank.any():
        row = int(np.flatnonzero(blank)[0])
        logger.error("%s: empty state/sex/type on row %d", path, row + 1)
        raise LoadError(f"{path}: empty state/sex/type on row {row + 1}")

    unknown_sex = sorted(set(df["sex"]) - set(params.SEXES))
    if unknown_sex:
        logger.warning("%s: unexpected sex values %s", path, unknown_sex)

    records = tuple(
        Record(state=s, sex=x, type=t, percent=float(p))
        for s, x, t, p in zip(df["state"], df["sex"], df["type"], percent)
    )
    logger.info("Loaded %d rows from %s", len(records), path)
    return records
