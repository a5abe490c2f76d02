from sqliprobe.parsers import payloads


def test_load_lines_skips_blanks_and_comments():
    text = "# header\n\n' OR SLEEP(5) -- \n   \n  # indented comment\n'\n"
    assert payloads.load_lines(text) == ["' OR SLEEP(5) -- ", "'"]


def test_load_lines_keeps_order_and_trailing_space():
    assert payloads.load_lines("b\na \nc") == ["b", "a ", "c"]


def test_load_file(tmp_path):
    f = tmp_path / "errors.txt"
    f.write_text("# sigs\nsql syntax\nORA-00933\n", encoding="utf-8")
    assert payloads.load_file(f) == ["sql syntax", "ORA-00933"]


def test_bundled_catalogs():
    time_based = payloads.time_based_payloads()
    error_based = payloads.error_based_payloads()
    signatures = payloads.error_signatures()

    assert time_based and error_based and signatures
    assert not set(time_based) & set(error_based)
    assert all(not p.strip().startswith("#") for p in time_based + error_based)
    assert "sql syntax" in signatures
    assert all(s == s.lower() for s in signatures)
