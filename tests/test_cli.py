import io

import pytest

from eagleye.cli import main


def _coordinate_lines(text):
    start = text.index("<coordinates>") + len("<coordinates>")
    end = text.index("</coordinates>")
    return [line.strip() for line in text[start:end].split("\n") if line.strip()]


def test_writes_gated_track(tmp_path):
    source = tmp_path / "log.txt"
    source.write_text(
        "# comment\n"
        "distance 0.1\n"
        "fix 35.0 139.0 5\n"
        "\n"
        "distance 1.0\n"
        "fix 35.25 139.5 10\n"
        "fix 35.3 139.6 10\n"
        "distance 2.0\n"
        "fix 35.5 139.75 11\n",
        encoding="utf-8",
    )
    output = tmp_path / "track.kml"
    code = main([str(source), "-o", str(output), "--kml-name", "drive", "--color", "ff00ff00"])
    assert code == 0
    text = output.read_text(encoding="utf-8")
    assert "<name>drive</name>" in text
    assert "<color>ff00ff00</color>" in text
    assert _coordinate_lines(text) == ["139.5,35.25,10", "139.75,35.5,11"]


def test_no_file_without_movement(tmp_path):
    source = tmp_path / "log.txt"
    source.write_text("fix 35.25 139.5 10\n", encoding="utf-8")
    output = tmp_path / "track.kml"
    assert main([str(source), "-o", str(output)]) == 0
    assert not output.exists()


def test_reads_stdin(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("distance 5\nfix 35.25 139.5 10\n"))
    output = tmp_path / "track.kml"
    assert main(["-o", str(output), "--interval", "1"]) == 0
    assert _coordinate_lines(output.read_text(encoding="utf-8")) == ["139.5,35.25,10"]


def test_malformed_record_exits_with_usage_error(tmp_path):
    source = tmp_path / "log.txt"
    source.write_text("fix 35.25 139.5\n", encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        main([str(source), "-o", str(tmp_path / "out.kml")])
    assert info.value.code == 2


def test_missing_input_exits_with_usage_error(tmp_path):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "absent.txt"), "-o", str(tmp_path / "out.kml")])
    assert info.value.code == 2