from typer.testing import CliRunner

from ripecidr import __version__
from ripecidr.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_countries_sorted_by_name():
    result = runner.invoke(app, ["countries", "--ripe-only"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()[1:]
    assert lines[0] == "AL - Albania"
    assert "RU - Russia" in lines
    assert "US - United States" not in lines
    names = [line.split(" - ", 1)[1] for line in lines]
    assert names == sorted(names)


def test_acl_filtered(db_path, tmp_path):
    out = tmp_path / "acl_RU.conf"
    result = runner.invoke(app, ["--db", str(db_path), "acl", "ru", "--filtered", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text() == 'acl "RU" {\n  1.2.0.0/16;\n  10.0.0.2/31;\n  10.0.0.4/31;\n};\n'


def test_acl_unfiltered_with_custom_name(db_path, tmp_path):
    out = tmp_path / "acl.conf"
    result = runner.invoke(app, ["--db", str(db_path), "acl", "RU", "--name", "russia", "-o", str(out)])
    assert result.exit_code == 0, result.output
    text = out.read_text()
    assert text.startswith('acl "russia" {')
    assert "  1.2.3.0/24;" in text


def test_ovpn(db_path, tmp_path):
    out = tmp_path / "ovpn.txt"
    result = runner.invoke(app, ["--db", str(db_path), "ovpn", "RU", "-f", "-o", str(out)])
    assert result.exit_code == 0, result.output
    lines = out.read_text().splitlines()
    assert lines[3] == "# Exclude RU IPs from VPN (FILTERED)"
    assert lines[4:] == [
        "route 1.2.0.0 255.255.0.0 net_gateway",
        "route 10.0.0.2 255.255.255.254 net_gateway",
        "route 10.0.0.4 255.255.255.254 net_gateway",
    ]


def test_whitelist_testcookie(db_path, tmp_path):
    out = tmp_path / "tc.conf"
    result = runner.invoke(
        app,
        ["--db", str(db_path), "whitelist", "cloudflare", "--format", "testcookie", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert out.read_text() == "5.6.7.0/24;\n8.8.8.0/24;\n"


def test_cidrs_stdout_and_csv(db_path, tmp_path):
    csv_path = tmp_path / "ranges.csv"
    result = runner.invoke(
        app,
        ["-q", "--db", str(db_path), "cidrs", "-k", "ok.ru", "-k", "Cloudflare", "--csv", str(csv_path)],
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["1.2.3.0/24", "5.6.7.0/24", "8.8.8.0/24"]
    assert csv_path.read_text().splitlines()[0].startswith("inetnum,first_ip,last_ip")


def test_cidrs_reads_gzip_database(gz_db_path):
    result = runner.invoke(app, ["-q", "--db", str(gz_db_path), "cidrs", "--country", "UA"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["5.6.7.0/24"]


def test_cidrs_requires_a_filter(db_path):
    result = runner.invoke(app, ["--db", str(db_path), "cidrs"])
    assert result.exit_code != 0


def test_db_from_environment(db_path):
    result = runner.invoke(app, ["cidrs", "-c", "UA"], env={"RIPECIDR_DB": str(db_path)})
    assert result.exit_code == 0, result.output
    assert "5.6.7.0/24" in result.stdout


def test_stats(db_path):
    result = runner.invoke(app, ["--db", str(db_path), "stats"])
    assert result.exit_code == 0, result.output
    assert "Russia" in result.stdout
    assert "5 ranges" in result.stdout


def test_missing_database(tmp_path):
    result = runner.invoke(app, ["--db", str(tmp_path / "nope"), "acl", "RU"])
    assert result.exit_code == 1
    assert "RIPE database not found" in result.output


def test_no_ranges_found(db_path, tmp_path):
    out = tmp_path / "acl_DE.conf"
    result = runner.invoke(app, ["--db", str(db_path), "acl", "DE", "-o", str(out)])
    assert result.exit_code == 1
    assert "No IP ranges found for DE" in result.output
    assert not out.exists()
