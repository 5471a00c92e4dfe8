# ripecidr/config.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

# Location used by the original shell workflow: the split inetnum export,
# downloaded from ftp.ripe.net and gunzipped into the user's home directory.
DEFAULT_DB_PATH = Path.home() / ".ripe.db.cache" / "ripe.db.inetnum"
DB_PATH_ENVVAR = "RIPECIDR_DB"
RIPE_DB_URL = "https://ftp.ripe.net/ripe/dbase/split/ripe.db.inetnum.gz"

DEFAULT_OUTPUT_DIR = Path.home()
BIND_ACL_FILENAME = "acl_{country}.conf"
OPENVPN_FILENAME = "openvpn_exclude_{country}.txt"
NGINX_WHITELIST_FILENAME = "whitelist.conf"
TESTCOOKIE_WHITELIST_FILENAME = "testcookie_whitelist.conf"

DB_ENCODING = "utf-8"


def resolve_db_path(path: Optional[Path]) -> Path:
    """Expand ``~`` and make the database path absolute; None means the default."""
    if path is None:
        path = DEFAULT_DB_PATH
    return Path(path).expanduser().resolve()


def default_output_path(template: str, country: Optional[str] = None) -> Path:
    name = template.format(country=(country or "").upper())
    return DEFAULT_OUTPUT_DIR / name
