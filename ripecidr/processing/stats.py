# ripecidr/processing/stats.py

from __future__ import annotations

from typing import Optional

import pandas as pd

from ripecidr.utils.countries import country_name
from ripecidr.utils.logging import get_logger

log = get_logger(__name__)

SUMMARY_COLUMNS = ["country", "name", "ranges", "cidrs", "addresses"]


def summarize_by_country(df: pd.DataFrame, top: Optional[int] = None) -> pd.DataFrame:
    """
    Per-country totals over a matched-range frame (see records_to_dataframe).

    Returns:
        DataFrame with columns country, name, ranges, cidrs, addresses,
        sorted by address count descending, then country code.
    """
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df = df.copy()
    df["country"] = df["country"].fillna("??")

    summary = (
        df.groupby("country", as_index=False)
        .agg(
            ranges=("inetnum", "count"),
            cidrs=("num_cidrs", "sum"),
            addresses=("num_addresses", "sum"),
        )
    )
    summary["name"] = summary["country"].map(lambda cc: country_name(cc) or "")
    summary = summary.sort_values(
        ["addresses", "country"], ascending=[False, True]
    ).reset_index(drop=True)

    if top is not None and top > 0:
        summary = summary.head(top)

    log.debug("Summarized %d ranges into %d countries", len(df), len(summary))
    return summary[SUMMARY_COLUMNS]
