from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from ripecidr import __version__
from ripecidr.config import (
    BIND_ACL_FILENAME,
    DB_PATH_ENVVAR,
    NGINX_WHITELIST_FILENAME,
    OPENVPN_FILENAME,
    RIPE_DB_URL,
    TESTCOOKIE_WHITELIST_FILENAME,
    default_output_path,
    resolve_db_path,
)
from ripecidr.datasources.base import records_to_dataframe
from ripecidr.datasources.ripe_db import RipeDbSource
from ripecidr.errors import DatabaseNotFoundError
from ripecidr.export.formats import (
    render_bind_acl,
    render_nginx_allow,
    render_openvpn,
    render_plain,
    render_testcookie,
)
from ripecidr.export.writer import save_csv, write_text
from ripecidr.processing.pipeline import QueryResult, run_query
from ripecidr.processing.redundancy import REASON_DUPLICATE
from ripecidr.processing.stats import summarize_by_country
from ripecidr.utils.countries import sorted_countries
from ripecidr.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Build BIND ACLs and OpenVPN route lists from the RIPE inetnum database.")

log = get_logger(__name__)


class WhitelistFormat(str, Enum):
    nginx = "nginx"
    testcookie = "testcookie"


@dataclass
class Settings:
    db_path: Path
    show_removed: bool = False


KEYWORD_HELP = (
    "Only use inetnum blocks whose text contains this keyword (case-insensitive). "
    "Repeat for several keywords; a block matches if it contains any of them."
)


@app.callback()
def main_options(
        ctx: typer.Context,
        db: Optional[Path] = typer.Option(
            None,
            "--db",
            envvar=DB_PATH_ENVVAR,
            help="Path to the RIPE inetnum database (plain or .gz). "
                 "Default: ~/.ripe.db.cache/ripe.db.inetnum",
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
        quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors."),
        show_removed: bool = typer.Option(
            False,
            "--show-removed",
            help="Log every CIDR dropped as a duplicate or as nested in a wider block.",
        ),
):
    """
    Extract per-country or per-keyword IPv4 networks from the RIPE database.
    """
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = Settings(db_path=resolve_db_path(db), show_removed=show_removed)


def _query(
        ctx: typer.Context,
        country: Optional[str],
        keywords: Optional[List[str]],
        filtered: bool,
) -> QueryResult:
    """
    Scan the database once and return the final CIDR list.

    A missing or unreadable database aborts the command; there is no
    partial result to fall back to.
    """
    settings: Settings = ctx.obj
    source = RipeDbSource(settings.db_path)
    log.info("Database: %s", settings.db_path)

    try:
        result = run_query(source.records(), country=country, keywords=keywords, filtered=filtered)
    except DatabaseNotFoundError as e:
        typer.echo(f"{e}", err=True)
        typer.echo(
            f"Download {RIPE_DB_URL}, gunzip it, and point --db (or ${DB_PATH_ENVVAR}) at it.",
            err=True,
        )
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error reading RIPE database {settings.db_path}: {e}", err=True)
        raise typer.Exit(code=1)

    if settings.show_removed:
        for block, reason, covering in result.removed:
            if reason == REASON_DUPLICATE:
                log.info("# %s -> removed as exact duplicate", block)
            else:
                log.info("# %s -> removed (covered by %s)", block, covering)

    if not result.blocks:
        what = country.upper() if country else ", ".join(keywords or []) or "query"
        typer.echo(f"No IP ranges found for {what}", err=True)
        raise typer.Exit(code=1)

    return result


@app.command()
def countries(
        ripe_only: bool = typer.Option(
            False,
            "--ripe-only",
            help="Only list countries served by the RIPE NCC.",
        ),
):
    """
    Show available country codes, sorted by country name.
    """
    typer.echo("Available country codes and their names (sorted by country name):")
    for code, name in sorted_countries(ripe_only=ripe_only):
        typer.echo(f"{code} - {name}")


@app.command()
def acl(
        ctx: typer.Context,
        country: str = typer.Argument(..., help="Two-letter country code, e.g. RU."),
        filtered: bool = typer.Option(
            False,
            "--filtered",
            "-f",
            help="Drop networks already contained in a wider network of the list.",
        ),
        keyword: Optional[List[str]] = typer.Option(None, "--keyword", "-k", help=KEYWORD_HELP),
        name: Optional[str] = typer.Option(None, "--name", help="ACL name (default: the country code)."),
        output: Optional[Path] = typer.Option(
            None,
            "--output",
            "-o",
            help="Output file (default: ~/acl_<COUNTRY>.conf).",
        ),
        compress: bool = typer.Option(False, "--gzip", help="Also write a .gz copy of the output."),
):
    """
    Generate a BIND ACL for a country code.

    Example:

        ripecidr acl RU --filtered -o /etc/bind/acl_RU.conf
    """
    country = country.upper()
    label = "with filtering " if filtered else ""
    log.info("Creating BIND ACL %sfor country code: %s", label, country)

    result = _query(ctx, country, keyword, filtered)
    content = render_bind_acl(name or country, result.blocks)

    out_path = output or default_output_path(BIND_ACL_FILENAME, country)
    write_text(content, out_path, compress=compress)
    typer.echo(f"BIND ACL file created at: {out_path} ({len(result.blocks)} networks)")


@app.command()
def ovpn(
        ctx: typer.Context,
        country: str = typer.Argument(..., help="Two-letter country code, e.g. RU."),
        filtered: bool = typer.Option(
            False,
            "--filtered",
            "-f",
            help="Drop networks already contained in a wider network of the list.",
        ),
        push: bool = typer.Option(
            False,
            "--push",
            help='Emit server-side push "route ..." directives instead of client routes.',
        ),
        keyword: Optional[List[str]] = typer.Option(None, "--keyword", "-k", help=KEYWORD_HELP),
        output: Optional[Path] = typer.Option(
            None,
            "--output",
            "-o",
            help="Output file (default: ~/openvpn_exclude_<COUNTRY>.txt).",
        ),
):
    """
    Generate an OpenVPN exclude-route list for a country code.
    """
    country = country.upper()
    log.info("Creating OpenVPN exclude-route list for country code: %s", country)

    result = _query(ctx, country, keyword, filtered)
    content = render_openvpn(result.blocks, country, push=push, filtered=filtered)

    out_path = output or default_output_path(OPENVPN_FILENAME, country)
    write_text(content, out_path)
    typer.echo(f"OpenVPN exclude-route file created at: {out_path} ({len(result.blocks)} routes)")


@app.command()
def whitelist(
        ctx: typer.Context,
        keywords: List[str] = typer.Argument(..., help="Keywords to search for, e.g. an organisation name."),
        fmt: WhitelistFormat = typer.Option(
            WhitelistFormat.nginx,
            "--format",
            help="nginx: 'allow <cidr>;' lines; testcookie: '<cidr>;' lines.",
        ),
        country: Optional[str] = typer.Option(None, "--country", "-c", help="Also require this country code."),
        output: Optional[Path] = typer.Option(
            None,
            "--output",
            "-o",
            help="Output file (default: ~/whitelist.conf or ~/testcookie_whitelist.conf).",
        ),
):
    """
    Produce an nginx or testcookie whitelist from every block mentioning a keyword.
    """
    result = _query(ctx, country, keywords, filtered=True)
    if fmt == WhitelistFormat.nginx:
        content = render_nginx_allow(result.blocks)
        default_name = NGINX_WHITELIST_FILENAME
    else:
        content = render_testcookie(result.blocks)
        default_name = TESTCOOKIE_WHITELIST_FILENAME

    out_path = output or default_output_path(default_name)
    write_text(content, out_path)
    typer.echo(f"Whitelist created at: {out_path} ({len(result.blocks)} networks)")


@app.command()
def cidrs(
        ctx: typer.Context,
        country: Optional[str] = typer.Option(None, "--country", "-c", help="Country code filter."),
        keyword: Optional[List[str]] = typer.Option(None, "--keyword", "-k", help=KEYWORD_HELP),
        no_filter: bool = typer.Option(
            False,
            "--no-filter",
            help="Keep networks nested in wider ones (only exact duplicates are removed).",
        ),
        csv_path: Optional[Path] = typer.Option(
            None,
            "--csv",
            help="Also export the matched inetnum ranges (one row per range) to this CSV file.",
        ),
):
    """
    Print the final CIDR list to stdout, one network per line.
    """
    if not country and not keyword:
        raise typer.BadParameter("give --country and/or at least one --keyword")

    result = _query(ctx, country, keyword, filtered=not no_filter)
    typer.echo(render_plain(result.blocks), nl=False)

    if csv_path is not None:
        save_csv(records_to_dataframe(result.ranges), csv_path)


@app.command()
def stats(
        ctx: typer.Context,
        country: Optional[str] = typer.Option(None, "--country", "-c", help="Country code filter."),
        keyword: Optional[List[str]] = typer.Option(None, "--keyword", "-k", help=KEYWORD_HELP),
        top: int = typer.Option(20, "--top", "-n", help="Show at most N countries (0 = all)."),
):
    """
    Summarize matched inetnum ranges per country: ranges, CIDR blocks, addresses.
    """
    result = _query(ctx, country, keyword, filtered=True)
    summary = summarize_by_country(records_to_dataframe(result.ranges), top=top)
    typer.echo(summary.to_string(index=False))
    typer.echo(
        f"\n{len(result.ranges)} ranges, {result.blocks_raw} raw blocks, "
        f"{len(result.blocks)} after removing {result.blocks_removed} redundant"
    )


@app.command()
def version():
    """Show the version of this application."""
    typer.echo(f"version: {__version__}")


def main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        # Graceful Ctrl+C handling
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
