import logging

from ripecidr.datasources.base import records_to_dataframe
from ripecidr.datasources.ripe_db import iter_records
from ripecidr.processing.pipeline import record_to_range, run_query


def _records(text):
    return iter_records(text.splitlines())


def test_country_query_filtered(sample_text):
    result = run_query(_records(sample_text), country="ru")

    assert result.cidrs == ["1.2.0.0/16", "10.0.0.2/31", "10.0.0.4/31"]
    assert result.records_seen == 10
    assert result.records_matched == 6
    assert result.ranges_discarded == 3
    assert result.blocks_raw == 4
    assert result.blocks_removed == 1


def test_country_query_unfiltered_keeps_nested(sample_text):
    result = run_query(_records(sample_text), country="RU", filtered=False)
    assert result.cidrs == ["1.2.0.0/16", "1.2.3.0/24", "10.0.0.2/31", "10.0.0.4/31"]
    assert result.removed == []


def test_keyword_query_any_country(sample_text):
    result = run_query(_records(sample_text), country="", keywords=["CLOUDFLARE"])
    assert result.cidrs == ["5.6.7.0/24", "8.8.8.0/24"]
    assert [r.netname for r in result.ranges] == ["EXAMPLE-UA", "NO-COUNTRY"]


def test_keyword_and_country(sample_text):
    result = run_query(_records(sample_text), country="RU", keywords=["ok.ru"])
    assert result.cidrs == ["1.2.3.0/24"]
    assert result.ranges[0].descr == "Organization: OK.RU Hosting"


def test_no_match(sample_text):
    result = run_query(_records(sample_text), country="DE")
    assert result.blocks == []
    assert result.ranges == []


def test_bad_addresses_are_reported_and_skipped(sample_text, caplog):
    with caplog.at_level(logging.WARNING, logger="ripecidr"):
        run_query(_records(sample_text), country="RU")
    messages = " ".join(r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)
    assert "9.9.9.9 - 9.9.9.1" in messages
    assert "1.2.3.4.5" in messages
    assert "not a range" not in messages


def test_record_without_inetnum_gives_nothing():
    record = next(iter_records(["netname: X", "country: RU"]))
    assert record_to_range(record) is None


def test_record_to_range():
    record = next(iter_records([
        "inetnum: 10.0.0.2 - 10.0.0.5",
        "netname: ODD",
        "country: ru",
    ]))
    rr = record_to_range(record)
    assert rr.country == "RU"
    assert rr.netname == "ODD"
    assert rr.num_addresses == 4
    assert [str(c) for c in rr.cidrs] == ["10.0.0.2/31", "10.0.0.4/31"]


def test_ranges_to_dataframe(sample_text):
    result = run_query(_records(sample_text), country="RU")
    df = records_to_dataframe(result.ranges)

    assert list(df["netname"]) == ["EXAMPLE-RU", "EXAMPLE-RU-WIDE", "ODD-RANGE"]
    assert list(df["num_addresses"]) == [256, 65536, 4]
    assert df.loc[2, "cidrs"] == "10.0.0.2/31 10.0.0.4/31"
    assert df.loc[1, "first_ip"] == "1.2.0.0"
    assert df.loc[1, "last_ip"] == "1.2.255.255"


def test_empty_dataframe_has_columns():
    df = records_to_dataframe([])
    assert df.empty
    assert "cidrs" in df.columns
