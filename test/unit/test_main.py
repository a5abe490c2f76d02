import pytest

from sqliprobe import main as cli
from sqliprobe.core.models import BodyType, ScanReport


def parse(*argv):
    return cli.args_to_settings(cli.build_parser().parse_args(list(argv)))


def test_defaults():
    s = parse("http://target.local/")
    assert s.url == "http://target.local/"
    assert s.method == "get"
    assert s.body_type is BodyType.RAW
    assert s.workers == 4
    assert s.offset == 0
    assert s.offset_samples == 0
    assert s.filtering is True
    assert s.headers == () and s.cookies == () and s.params == () and s.data == ()


def test_full_options():
    s = parse("-X", "post", "-H", "X-A: 1", "-H", "X-B: 2", "-c", "a=1", "-p", "id", "-p", "q",
              "-d", "page=1", "-j", "-o", "150", "-s", "5", "-n", "-w", "8",
              "--proxy", "http://127.0.0.1:8080", "http://target.local/")
    assert s.method == "post"
    assert s.headers == ("X-A: 1", "X-B: 2")
    assert s.cookies == ("a=1",)
    assert s.params == ("id", "q")
    assert s.data == ("page=1",)
    assert s.body_type is BodyType.JSON
    assert s.offset == 150
    assert s.offset_samples == 5
    assert s.filtering is False
    assert s.workers == 8
    assert s.proxy == "http://127.0.0.1:8080"


def test_form_flag():
    assert parse("-f", "http://target.local/").body_type is BodyType.FORM


def test_json_and_form_are_exclusive():
    with pytest.raises(SystemExit):
        parse("-j", "-f", "http://target.local/")


def test_configuration_error_exits_non_zero():
    assert cli.main(["-X", "TRACE", "http://target.local/"]) == 1


def test_missing_catalog_exits_non_zero(tmp_path):
    missing = tmp_path / "nope.txt"
    assert cli.main(["--errors", str(missing), "http://target.local/"]) == 1


def test_successful_scan_exits_zero(monkeypatch, tmp_path):
    seen = {}

    def fake_scan(self, time_payloads, error_payloads, signatures):
        seen["time"] = time_payloads
        seen["sigs"] = signatures
        return None

    monkeypatch.setattr(cli.Engine, "scan", fake_scan)
    sigs = tmp_path / "sigs.txt"
    sigs.write_text("custom error\n", encoding="utf-8")

    assert cli.main(["--errors", str(sigs), "http://target.local/"]) == 0
    assert seen["sigs"] == ["custom error"]
    assert seen["time"]


def test_undecodable_catalog_exits_non_zero(tmp_path, capsys):
    sigs = tmp_path / "sigs.txt"
    sigs.write_bytes(b"\xff\xfe")
    assert cli.main(["--errors", str(sigs), "http://target.local/"]) == 1
    assert "Cannot read catalog" in capsys.readouterr().out


def test_verify_flag():
    assert parse("http://target.local/").verify_tls is False
    assert parse("--verify", "https://target.local/").verify_tls is True
