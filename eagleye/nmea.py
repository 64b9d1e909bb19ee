"""Conversion of NMEA GGA and RMC sentences into position records."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import List, Optional

LEAP_SECONDS = 18
"""Offset in seconds added to every converted UTC time of day."""

_LOCAL_HOUR_OFFSET = 9
_GGA_FIELD_COUNT = 15
_RMC_FIELD_COUNT = 13


@dataclass
class Gga:
    """Fields of a GGA (fix data) sentence."""

    stamp: float = 0.0
    message_id: str = ""
    utc_seconds: float = 0.0
    lat: float = 0.0
    lat_dir: str = ""
    lon: float = 0.0
    lon_dir: str = ""
    gps_qual: int = 0
    num_sats: int = 0
    hdop: float = 0.0
    alt: float = 0.0
    altitude_units: str = ""
    undulation: float = 0.0
    undulation_units: str = ""
    diff_age: float = 0.0
    station_id: str = ""


@dataclass
class Rmc:
    """Fields of an RMC (recommended minimum) sentence."""

    stamp: float = 0.0
    message_id: str = ""
    utc_seconds: float = 0.0
    position_status: str = ""
    lat: float = 0.0
    lat_dir: str = ""
    lon: float = 0.0
    lon_dir: str = ""
    speed: float = 0.0
    track: float = 0.0
    date: str = ""
    mag_var: float = 0.0
    mag_var_direction: str = ""
    mode_indicator: str = ""


@dataclass
class NavSatFix:
    """A geodetic fix derived from a GGA sentence."""

    stamp: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    status: int = 0
    service: int = 0


@dataclass
class ConversionResult:
    """What one sentence block produced; absent records are None."""

    fix: Optional[NavSatFix] = None
    gga: Optional[Gga] = None
    rmc: Optional[Rmc] = None


def parse_nmea_degrees(value) -> float:
    """Convert an NMEA ``dddmm.mmmm`` value into decimal degrees."""
    number = float(value)
    return math.floor(number / 100) + math.fmod(number, 100) / 60


def string_to_gps_time(text: str, header_time: float) -> float:
    """Turn an ``hhmmss.ss`` time of day into epoch seconds.

    The date is taken from ``header_time`` in local time, the hour is shifted
    by nine hours and the leap-second offset is added.
    """
    local = time.localtime(int(header_time))
    hour = int(float(text[0:2])) + _LOCAL_HOUR_OFFSET
    minute = int(float(text[2:4]))
    second = int(float(text[4:6]))
    fraction = float(text[6:])
    base = time.mktime(
        (local.tm_year, local.tm_mon, local.tm_mday, hour, minute, second, 0, 0, -1)
    )
    return base + fraction + LEAP_SECONDS


def _require(fields: List[str], count: int, kind: str) -> None:
    if len(fields) < count:
        raise ValueError(
            f"{kind} sentence has {len(fields)} fields, expected at least {count}"
        )


def _strip_checksum(text: str) -> str:
    return text.split("*", 1)[0]


def _apply_gga(fields: List[str], stamp: float, gga: Gga, fix: NavSatFix) -> None:
    _require(fields, _GGA_FIELD_COUNT, "GGA")
    gga.stamp = stamp
    gga.message_id = fields[0]
    if fields[1]:
        gga.utc_seconds = string_to_gps_time(fields[1], stamp)
    gga.lat = parse_nmea_degrees(fields[2])
    gga.lat_dir = fields[3]
    gga.lon = parse_nmea_degrees(fields[4])
    gga.lon_dir = fields[5]
    if fields[6]:
        gga.gps_qual = int(float(fields[6]))
    if fields[7]:
        gga.num_sats = int(float(fields[7]))
    if fields[8]:
        gga.hdop = float(fields[8])
    if fields[9]:
        gga.alt = float(fields[9])
    gga.altitude_units = fields[10]
    if fields[11]:
        gga.undulation = float(fields[11])
    gga.undulation_units = fields[12]
    if fields[13]:
        gga.diff_age = float(fields[13])
    gga.station_id = _strip_checksum(fields[14])

    fix.stamp = stamp
    if gga.lat_dir == "N":
        fix.latitude = gga.lat
    elif gga.lat_dir == "S":
        fix.latitude = -gga.lat
    if gga.lon_dir == "E":
        fix.longitude = gga.lon
    elif gga.lon_dir == "W":
        fix.longitude = -gga.lon
    fix.altitude = gga.alt + gga.undulation
    fix.service = 1
    fix.status = 0 if gga.gps_qual == 4 else -1


def _apply_rmc(fields: List[str], stamp: float, rmc: Rmc) -> None:
    _require(fields, _RMC_FIELD_COUNT, "RMC")
    rmc.stamp = stamp
    rmc.message_id = fields[0]
    if fields[1]:
        rmc.utc_seconds = string_to_gps_time(fields[1], stamp)
    rmc.position_status = fields[2]
    rmc.lat = parse_nmea_degrees(fields[3])
    rmc.lat_dir = fields[4]
    rmc.lon = parse_nmea_degrees(fields[5])
    rmc.lon_dir = fields[6]
    if fields[7]:
        rmc.speed = float(fields[7])
    if fields[8]:
        rmc.track = float(fields[8])
    if fields[9]:
        rmc.date = fields[9]
    if fields[10]:
        rmc.mag_var = float(fields[10])
    if fields[11]:
        rmc.mag_var_direction = fields[11]
    rmc.mode_indicator = _strip_checksum(fields[12])


def convert_sentence(sentence: str, stamp: float) -> ConversionResult:
    """Convert a block of newline-separated NMEA sentences.

    GGA lines fill a :class:`Gga` and a :class:`NavSatFix`, RMC lines a
    :class:`Rmc`. Later lines of the same kind update the earlier record.
    Lines without latitude and longitude are ignored.
    """
    result = ConversionResult()
    for line in sentence.split("\n"):
        kind = line[3:6]
        if kind not in ("GGA", "RMC"):
            continue
        fields = line.split(",")
        if kind == "GGA":
            _require(fields, 5, "GGA")
            if not (fields[2] or fields[4]):
                continue
            result.gga = result.gga or Gga()
            result.fix = result.fix or NavSatFix()
            _apply_gga(fields, stamp, result.gga, result.fix)
        else:
            _require(fields, 6, "RMC")
            if not (fields[3] or fields[5]):
                continue
            result.rmc = result.rmc or Rmc()
            _apply_rmc(fields, stamp, result.rmc)
    return result