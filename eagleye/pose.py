"""Pose construction from geodetic fixes and the estimated heading."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from eagleye.geometry import Quaternion, Transform, Vector3

UNKNOWN_ANGLE_STD = 100.0
"""Standard deviation in radians reported for an angle not yet estimated."""

ESTIMATED_ANGLE_STD = 0.5 / 180 * math.pi
"""Standard deviation in radians reported for an estimated roll or pitch."""

DEFAULT_FIX_STD_THRESHOLD = 0.1


class FixJudgement(enum.IntEnum):
    """How a fix is judged good enough to be published."""

    STATUS = 0
    COVARIANCE = 1


class HeightConversion(enum.IntEnum):
    """Conversion applied to the height of a fix."""

    NONE = 0
    ELLIPSOID_TO_ORTHOMETRIC = 1
    ORTHOMETRIC_TO_ELLIPSOID = 2


class GeoidType(enum.IntEnum):
    """Geoid model used for height conversion."""

    EGM2008 = 0
    GSIGEO2011 = 1


@dataclass(frozen=True)
class ProjectionSettings:
    """Settings of the map projection used to turn fixes into positions."""

    use_mgrs: bool
    plane_num: Optional[int]
    height_conversion: HeightConversion
    geoid_type: GeoidType


@dataclass(frozen=True)
class Pose:
    """A position and orientation in a named frame."""

    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)
    frame_id: str = "map"


def projection_settings(
    plane: int = 7, tf_num: int = 7, convert_height_num: int = 7, geoid_type: int = 0
) -> ProjectionSettings:
    """Validate the numeric projection options.

    ``tf_num`` 1 selects plane rectangular coordinates with ``plane``,
    2 selects MGRS. ``convert_height_num`` and ``geoid_type`` select a
    :class:`HeightConversion` and a :class:`GeoidType`.
    """
    if tf_num == 1:
        use_mgrs, plane_num = False, plane
    elif tf_num == 2:
        use_mgrs, plane_num = True, None
    else:
        raise ValueError(f"tf_num is not valid: {tf_num!r}")
    try:
        height = HeightConversion(convert_height_num)
    except ValueError:
        raise ValueError(f"convert_height_num is not valid: {convert_height_num!r}") from None
    try:
        geoid = GeoidType(geoid_type)
    except ValueError:
        raise ValueError(f"GeoidType is not valid: {geoid_type!r}") from None
    return ProjectionSettings(use_mgrs, plane_num, height, geoid)


def fix_is_accepted(
    status: int,
    position_covariance: Sequence[float],
    judgement: Union[int, FixJudgement] = FixJudgement.STATUS,
    std_threshold: float = DEFAULT_FIX_STD_THRESHOLD,
) -> bool:
    """Whether a fix passes the selected judgement.

    By status the fix must have status 0; by covariance its first position
    variance must not exceed the square of ``std_threshold``.
    """
    try:
        kind = FixJudgement(judgement)
    except ValueError:
        raise ValueError(f"fix_judgement_type is not valid: {judgement!r}") from None
    if kind is FixJudgement.STATUS:
        return status == 0
    return position_covariance[0] <= std_threshold * std_threshold


def heading_to_yaw(heading_angle: float, convergence: float = 0.0) -> float:
    """Turn a clockwise-from-north heading into an ENU yaw angle.

    ``convergence`` is the meridian convergence angle added to the result.
    """
    return math.fmod(math.pi / 2 - heading_angle, 2 * math.pi) + convergence


def pose_covariance(
    position_covariance: Sequence[float],
    rolling_enabled: bool,
    pitching_enabled: bool,
    heading_enabled: bool,
    heading_variance: float,
) -> List[float]:
    """The row-major 6x6 pose covariance for a fix and the angle states."""
    std_roll = ESTIMATED_ANGLE_STD if rolling_enabled else UNKNOWN_ANGLE_STD
    std_pitch = ESTIMATED_ANGLE_STD if pitching_enabled else UNKNOWN_ANGLE_STD
    std_yaw = math.sqrt(heading_variance) if heading_enabled else UNKNOWN_ANGLE_STD
    covariance = [0.0] * 36
    covariance[0] = position_covariance[0]
    covariance[7] = position_covariance[4]
    covariance[14] = position_covariance[8]
    covariance[21] = std_roll * std_roll
    covariance[28] = std_pitch * std_pitch
    covariance[35] = std_yaw * std_yaw
    return covariance


def apply_sensor_offset(pose: Pose, offset: Transform) -> Pose:
    """Move a pose from the antenna to the base frame by composing ``offset``."""
    combined = Transform(pose.position, pose.orientation) * offset
    return Pose(combined.translation, combined.rotation, pose.frame_id)