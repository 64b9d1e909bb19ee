"""Selection and screening of GNSS input sources."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence, Union

DEFAULT_TWIST_COVARIANCE_THRESHOLD = 0.2
DEFAULT_UBLOX_ACCURACY_THRESHOLD = 200.0


class GnssSourceError(ValueError):
    """Raised when the configured GNSS source types cannot be used."""


class VelocitySource(enum.IntEnum):
    """Message type providing GNSS velocity."""

    RTKLIB_NAV = 0
    NMEA_SENTENCE = 1
    UBLOX_NAVPVT = 2
    TWIST_WITH_COVARIANCE = 3


class LlhSource(enum.IntEnum):
    """Message type providing GNSS latitude, longitude and height."""

    RTKLIB_NAV = 0
    NMEA_SENTENCE = 1
    NAVSATFIX = 2


@dataclass(frozen=True)
class SourceSelection:
    """The sources to subscribe to; a sub antenna has no velocity source."""

    velocity: Optional[VelocitySource]
    llh: LlhSource


def select_sources(
    is_sub_antenna: bool,
    use_multi_antenna_mode: bool,
    velocity_source_type: Union[int, VelocitySource],
    llh_source_type: Union[int, LlhSource],
) -> SourceSelection:
    """Validate the source types for a main or sub antenna."""
    if is_sub_antenna:
        if llh_source_type == LlhSource.RTKLIB_NAV:
            raise GnssSourceError("Invalid llh_source_type for Sub Antenna")
    elif use_multi_antenna_mode and llh_source_type == LlhSource.RTKLIB_NAV:
        raise GnssSourceError(
            "Invalid llh_source_type for Main Antenna in Multi Antenna Mode"
        )

    velocity: Optional[VelocitySource] = None
    if not is_sub_antenna:
        try:
            velocity = VelocitySource(velocity_source_type)
        except ValueError:
            raise GnssSourceError(
                f"Invalid velocity_source_type {velocity_source_type!r}"
            ) from None
    try:
        llh = LlhSource(llh_source_type)
    except ValueError:
        raise GnssSourceError(f"Invalid llh_source_type {llh_source_type!r}") from None
    return SourceSelection(velocity, llh)


def has_position_covariance(position_covariance: Sequence[float]) -> bool:
    """False when the diagonal of a 3x3 position covariance is all zero."""
    return not (
        position_covariance[0] == 0
        and position_covariance[4] == 0
        and position_covariance[8] == 0
    )


def accept_twist(
    covariance: Sequence[float], threshold: float = DEFAULT_TWIST_COVARIANCE_THRESHOLD
) -> bool:
    """Whether a GNSS twist's first velocity variance is within ``threshold``."""
    return covariance[0] <= threshold


def accept_navpvt(
    s_acc: float, threshold: float = DEFAULT_UBLOX_ACCURACY_THRESHOLD
) -> bool:
    """Whether a receiver's speed accuracy estimate is within ``threshold``."""
    return s_acc <= threshold