import gzip
import logging

import pytest

SAMPLE_DB = """\
% This is the RIPE Database query service.
% The objects are in RPSL format.

inetnum:        1.2.3.0 - 1.2.3.255
netname:        EXAMPLE-RU
descr:          Organization: OK.RU Hosting
country:        RU
source:         RIPE

inetnum:        1.2.0.0 - 1.2.255.255
netname:        EXAMPLE-RU-WIDE
country:        ru
source:         RIPE

inetnum:        5.6.7.0 - 5.6.7.255
netname:        EXAMPLE-UA
descr:          Cloudflare edge
country:        UA

inetnum:        10.0.0.2 - 10.0.0.5
netname:        ODD-RANGE
country:        RU

inetnum:        9.9.9.9 - 9.9.9.1
netname:        INVERTED
country:        RU

inetnum:        1.2.3.4.5 - 1.2.3.9
netname:        TOO-MANY-OCTETS
country:        RU

inetnum:        not a range
country:        RU

netname:        NO-INETNUM
country:        RU
descr:          cloudflare mention without a range

inetnum:        8.8.8.0 - 8.8.8.255
netname:        NO-COUNTRY
descr:          CloudFlare anycast
"""


@pytest.fixture
def sample_text():
    return SAMPLE_DB


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "ripe.db.inetnum"
    path.write_text(SAMPLE_DB, encoding="utf-8")
    return path


@pytest.fixture
def gz_db_path(tmp_path):
    path = tmp_path / "ripe.db.inetnum.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(SAMPLE_DB)
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger("ripecidr")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
