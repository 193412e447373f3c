"""Read station records from one real-time observation file.

Observation files are CSV with a header row holding at least ``site_no`` and
``discharge`` (m^3/s). An optional ``quality`` column carries a 0-100 code;
where it is absent or blank the record is taken as fully trusted (100).
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

__all__ = ['read_observation_file', 'REQUIRED_COLUMNS']

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("site_no", "discharge")
STATION_ID_WIDTH = 15


def read_observation_file(path: Path | str) -> pd.DataFrame:
    """Load one observation file into a normalized records table.

    Parameters
    ----------
    path : Path or str
        CSV observation file.

    Returns
    -------
    pd.DataFrame
        Columns ``site_no`` (str), ``discharge`` (float64) and ``quality``
        (int16, 0-100). Rows with a blank station id or a missing or negative
        discharge are dropped. May be empty.

    Raises
    ------
    ValueError
        If the file is not CSV or lacks a required column (pandas parser
        errors are ValueError subclasses).
    OSError
        If the file cannot be opened.
    """
    path = Path(path)
    # all columns as text; dtype by name would miss padded headers
    df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name}: missing column(s) {', '.join(missing)}")

    records = pd.DataFrame({
        "site_no": df["site_no"].fillna("").astype(str).str.strip(),
        "discharge": pd.to_numeric(df["discharge"], errors="coerce"),
    })

    if "quality" in df.columns:
        quality = pd.to_numeric(df["quality"], errors="coerce").fillna(100)
    else:
        quality = pd.Series(100, index=df.index)
    records["quality"] = np.clip(quality.to_numpy(), 0, 100).astype(np.int16)

    valid = (
        (records["site_no"].str.len() > 0)
        & (records["site_no"].str.len() <= STATION_ID_WIDTH)
        & records["discharge"].notna()
        & (records["discharge"] >= 0)
    )
    dropped = int((~valid).sum())
    if dropped:
        logger.debug("%s: dropped %d invalid record(s)", path.name, dropped)

    records = records.loc[valid].reset_index(drop=True)
    return records
