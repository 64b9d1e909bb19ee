"""Command that turns a log of distances and fixes into a KML track."""

from __future__ import annotations

import argparse
import contextlib
import sys
from typing import Optional, Sequence

from eagleye.kml import DEFAULT_COLOR, DEFAULT_INTERVAL, DistanceGatedTrack, KmlGenerator


def _apply(track: DistanceGatedTrack, line: str) -> None:
    parts = line.split()
    if not parts or parts[0].startswith("#"):
        return
    kind, values = parts[0], parts[1:]
    if kind == "distance":
        if len(values) != 1:
            raise ValueError("distance record needs one value")
        track.update_distance(float(values[0]))
    elif kind == "fix":
        if len(values) != 3:
            raise ValueError("fix record needs latitude, longitude and altitude")
        latitude, longitude, altitude = (float(value) for value in values)
        track.add_fix(longitude, latitude, altitude)
    else:
        raise ValueError(f"unknown record {kind!r}")


def _open_input(path: str):
    if path == "-":
        return contextlib.nullcontext(sys.stdin)
    return open(path, encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="eagleye-fix2kml",
        description=(
            "Read 'distance <m>' and 'fix <lat> <lon> <alt>' records and write "
            "a KML track, adding a fix whenever the distance has grown by more "
            "than the interval."
        ),
    )
    parser.add_argument("input", nargs="?", default="-", help="record file, '-' for stdin")
    parser.add_argument("-o", "--output", required=True, help="KML file to write")
    parser.add_argument("--kml-name", default="", help="name of the document and line")
    parser.add_argument("--color", default=DEFAULT_COLOR, help="line colour, aabbggrr")
    parser.add_argument(
        "--interval", type=float, default=DEFAULT_INTERVAL, help="distance gate in metres"
    )
    args = parser.parse_args(argv)

    track = DistanceGatedTrack(
        KmlGenerator(args.kml_name, args.color), args.output, args.interval
    )
    try:
        with _open_input(args.input) as stream:
            for number, line in enumerate(stream, 1):
                try:
                    _apply(track, line)
                except ValueError as exc:
                    parser.error(f"line {number}: {exc}")
    except OSError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())