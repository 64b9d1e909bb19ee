"""Building KML line-string documents from geodetic points."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

DEFAULT_COLOR = "ff0000ff"
DEFAULT_INTERVAL = 0.2

_PathLike = Union[str, Path]


def _header(name: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<kml xmlns="http://earth.google.com/kml/2.2">\n'
        "<Document>\n"
        f"<name>{name}</name>\n"
        "\n"
    )


_FOOTER = "</Document>\n</kml>\n"

_CONFIG_FOOTER = (
    "\t\t\t</coordinates>\n"
    "\t\t</LineString>\n"
    "\t</Placemark>\n"
    "\n"
)


def _config_header(name: str, color: str) -> str:
    return (
        "\t<Placemark>\n"
        f"\t\t<name>{name}</name>\n"
        "\t\t<Style>\n"
        "\t\t\t<LineStyle>\n"
        f"\t\t\t\t<color>{color}</color>\n"
        "\t\t\t\t<width>5.00</width>\n"
        "\t\t\t</LineStyle>\n"
        "\t\t</Style>\n"
        "\t\t<LineString>\n"
        "\t\t\t<tessellate>1</tessellate>\n"
        "\t\t\t<coordinates>\n"
    )


class KmlGenerator:
    """Accumulates points into one coloured KML line string."""

    def __init__(self, name: str, color: str = DEFAULT_COLOR) -> None:
        self._header = _header(name)
        self._config_header = _config_header(name, color)
        self._points = io.StringIO()

    def add_point(self, longitude: float, latitude: float, altitude: float) -> None:
        """Append one coordinate triple to the line."""
        self._points.write(
            f"{longitude:.13g},{latitude:.13g},{altitude:.13g}\n"
        )

    def body(self) -> str:
        """The placemark holding the line, without document header or footer."""
        return self._config_header + self._points.getvalue() + _CONFIG_FOOTER

    def document(self) -> str:
        """The complete KML document."""
        return self._header + self.body() + _FOOTER

    def write(self, filename: _PathLike) -> None:
        """Write the complete document to ``filename``, replacing it."""
        Path(filename).write_text(self.document(), encoding="utf-8")


def write_kml(name: str, filename: _PathLike, body: str) -> None:
    """Write a KML document named ``name`` around an existing ``body``."""
    Path(filename).write_text(_header(name) + body + _FOOTER, encoding="utf-8")


class DistanceGatedTrack:
    """Adds fixes to a KML file once the travelled distance grows enough."""

    def __init__(
        self,
        generator: KmlGenerator,
        filename: _PathLike,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.generator = generator
        self.filename = filename
        self.interval = interval
        self._distance = 0.0
        self._distance_last = 0.0

    def update_distance(self, distance: float) -> None:
        """Record the current driving distance in metres."""
        self._distance = distance

    def add_fix(self, longitude: float, latitude: float, altitude: float) -> bool:
        """Add the fix and rewrite the file if the distance gate is passed."""
        if self._distance - self._distance_last <= self.interval:
            return False
        self.generator.add_point(longitude, latitude, altitude)
        self.generator.write(self.filename)
        self._distance_last = self._distance
        return True