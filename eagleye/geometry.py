"""Vector and rotation helpers, IMU frame conversion and twist relaying."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import NamedTuple, Union


@dataclass(frozen=True)
class Vector3:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def cross(self, other: "Vector3") -> "Vector3":
        """The cross product ``self x other``."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def scaled(self, factor: float) -> "Vector3":
        """The vector multiplied by ``factor``."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def norm(self) -> float:
        """The Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion; the default is the identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def rotate(self, vector: Vector3) -> Vector3:
        """Rotate ``vector`` by this (unit) quaternion."""
        axis = Vector3(self.x, self.y, self.z)
        t = axis.cross(vector).scaled(2.0)
        return vector + t.scaled(self.w) + axis.cross(t)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
        )


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """The quaternion for fixed-axis roll, pitch and yaw angles in radians."""
    cr, sr = math.cos(roll / 2), math.sin(roll / 2)
    cp, sp = math.cos(pitch / 2), math.sin(pitch / 2)
    cy, sy = math.cos(yaw / 2), math.sin(yaw / 2)
    return Quaternion(
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
        cr * cp * cy + sr * sp * sy,
    )


@dataclass(frozen=True)
class Transform:
    """A rigid transform: rotation followed by translation."""

    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)

    def apply(self, vector: Vector3) -> Vector3:
        """Transform a point."""
        return self.rotation.rotate(vector) + self.translation

    def __mul__(self, other: "Transform") -> "Transform":
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(
            self.rotation.rotate(other.translation) + self.translation,
            self.rotation * other.rotation,
        )


@dataclass(frozen=True)
class Imu:
    """An inertial measurement in the frame named by ``frame_id``."""

    stamp: float = 0.0
    frame_id: str = ""
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: Vector3 = field(default_factory=Vector3)
    linear_acceleration: Vector3 = field(default_factory=Vector3)


def convert_imu(imu: Imu, transform: Transform, reverse_wz: bool = False) -> Imu:
    """Rotate the IMU rates and accelerations into the base frame.

    Only the rotation of ``transform`` is used. The header is kept, the
    orientation becomes the identity and, if ``reverse_wz`` is set, the sign
    of the yaw rate is flipped.
    """
    angular = transform.rotation.rotate(imu.angular_velocity)
    if reverse_wz:
        angular = Vector3(angular.x, angular.y, -angular.z)
    return Imu(
        stamp=imu.stamp,
        frame_id=imu.frame_id,
        orientation=Quaternion(),
        angular_velocity=angular,
        linear_acceleration=transform.rotation.rotate(imu.linear_acceleration),
    )


class TwistType(enum.IntEnum):
    """The kind of twist message a relay receives."""

    TWIST_STAMPED = 0
    TWIST_WITH_COVARIANCE_STAMPED = 1


class _StampedTwist(NamedTuple):
    stamp: float
    linear: Vector3
    angular: Vector3


class TwistRelay:
    """Forwards incoming twists of one kind as plain stamped twists."""

    def __init__(self, twist_type: Union[int, TwistType] = TwistType.TWIST_STAMPED) -> None:
        try:
            self.twist_type = TwistType(twist_type)
        except ValueError:
            raise ValueError(f"invalid twist topic type {twist_type!r}") from None

    def relay(self, stamp: float, linear: Vector3, angular: Vector3) -> _StampedTwist:
        """The stamped twist published for one incoming message."""
        return _StampedTwist(stamp, linear, angular)