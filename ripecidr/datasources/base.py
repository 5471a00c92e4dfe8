# ripecidr/datasources/base.py

from __future__ import annotations

from typing import Iterable

import pandas as pd

from ripecidr.models import RangeRecord, int_to_ip

COLUMNS = [
    "inetnum",
    "first_ip",
    "last_ip",
    "start",
    "end",
    "num_addresses",
    "country",
    "netname",
    "descr",
    "num_cidrs",
    "cidrs",
]


def records_to_dataframe(records: Iterable[RangeRecord]) -> pd.DataFrame:
    """
    Flatten matched inetnum ranges into a DataFrame, one row per range.

    cidrs is stored space-separated so the frame round-trips through CSV.
    """
    rows = [
        {
            "inetnum": r.inetnum,
            "first_ip": int_to_ip(r.start),
            "last_ip": int_to_ip(r.end),
            "start": r.start,
            "end": r.end,
            "num_addresses": r.num_addresses,
            "country": r.country,
            "netname": r.netname,
            "descr": r.descr,
            "num_cidrs": len(r.cidrs),
            "cidrs": " ".join(str(c) for c in r.cidrs),
        }
        for r in records
    ]
    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows, columns=COLUMNS)
