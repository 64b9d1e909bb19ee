import xml.etree.ElementTree as ET

import pytest

from eagleye.kml import DistanceGatedTrack, KmlGenerator, write_kml


def _coordinates(document):
    root = ET.fromstring(document)
    nodes = [node for node in root.iter() if node.tag.endswith("coordinates")]
    assert len(nodes) == 1
    return [line.strip() for line in nodes[0].text.split("\n") if line.strip()]


def test_add_point_uses_thirteen_significant_digits():
    generator = KmlGenerator("track")
    generator.add_point(139.7671234567, 35.6812345678, 40.5)
    generator.add_point(1.0, 2.0, 10.0)
    assert "139.7671234567,35.6812345678,40.5\n" in generator.body()
    assert "1,2,10\n" in generator.body()


def test_body_carries_name_and_color():
    generator = KmlGenerator("route", "ff00ff00")
    body = generator.body()
    assert body.startswith("\t<Placemark>\n\t\t<name>route</name>\n")
    assert "<color>ff00ff00</color>" in body
    assert body.endswith("\t</Placemark>\n\n")


def test_default_color():
    assert "<color>ff0000ff</color>" in KmlGenerator("x").body()


def test_document_is_valid_xml_with_points_in_order():
    generator = KmlGenerator("route")
    points = [(139.5, 35.25, 10.0), (139.75, 35.5, 11.0)]
    for point in points:
        generator.add_point(*point)
    document = generator.document()
    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert document.endswith("</Document>\n</kml>\n")
    assert _coordinates(document) == ["139.5,35.25,10", "139.75,35.5,11"]


def test_write_matches_document(tmp_path):
    generator = KmlGenerator("route")
    generator.add_point(139.5, 35.25, 10.0)
    target = tmp_path / "out.kml"
    generator.write(target)
    assert target.read_text(encoding="utf-8") == generator.document()


def test_write_kml_wraps_body(tmp_path):
    generator = KmlGenerator("inner")
    generator.add_point(139.5, 35.25, 10.0)
    target = tmp_path / "wrapped.kml"
    write_kml("outer", target, generator.body())
    text = target.read_text(encoding="utf-8")
    assert "<name>outer</name>" in text
    assert generator.body() in text
    assert _coordinates(text) == ["139.5,35.25,10"]


def test_write_to_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        KmlGenerator("x").write(tmp_path / "missing" / "out.kml")


def test_distance_gate(tmp_path):
    target = tmp_path / "track.kml"
    track = DistanceGatedTrack(KmlGenerator("track"), target, 0.2)
    assert track.add_fix(139.5, 35.25, 10.0) is False
    assert not target.exists()

    track.update_distance(0.2)
    assert track.add_fix(139.5, 35.25, 10.0) is False

    track.update_distance(0.5)
    assert track.add_fix(139.5, 35.25, 10.0) is True
    assert _coordinates(target.read_text(encoding="utf-8")) == ["139.5,35.25,10"]

    assert track.add_fix(139.6, 35.3, 10.0) is False
    track.update_distance(1.0)
    assert track.add_fix(139.75, 35.5, 11.0) is True
    assert _coordinates(target.read_text(encoding="utf-8")) == [
        "139.5,35.25,10",
        "139.75,35.5,11",
    ]