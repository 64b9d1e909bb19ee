"""Plausibility guards applied to estimator outputs before they are published."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_SCALE_FACTOR_PERCENT = 20.0
DEFAULT_DEADLOCK_TIME = 1.0


class ErrorCode(enum.Enum):
    """Why an estimate was rejected."""

    NAN_OR_INFINITE = "nan_or_infinite"
    TOO_LARGE_OR_SMALL = "too_large_or_small"


@dataclass(frozen=True)
class GuardResult:
    """The value to publish after a guard has looked at an estimate.

    ``corrected_velocity`` is only set when the guard replaced the estimate;
    None means the estimator's own corrected velocity stands.
    """

    value: float
    is_abnormal: bool = False
    error_code: Optional[ErrorCode] = None
    corrected_velocity: Optional[float] = None


class ScaleFactorGuard:
    """Rejects non-finite scale factors and ones too far from 1.

    A rejected estimate is replaced by the last accepted scale factor, which
    starts at 1.0, and the raw velocity is rescaled with it.
    """

    def __init__(self, threshold_percent: float = DEFAULT_SCALE_FACTOR_PERCENT) -> None:
        self.threshold_percent = threshold_percent
        self.previous = 1.0

    def check(self, scale_factor: float, velocity: float) -> GuardResult:
        """Judge ``scale_factor`` for a raw ``velocity`` in m/s."""
        if not math.isfinite(scale_factor):
            return self._reject(velocity, ErrorCode.NAN_OR_INFINITE)
        if self.threshold_percent / 100 < abs(1.0 - scale_factor):
            return self._reject(velocity, ErrorCode.TOO_LARGE_OR_SMALL)
        self.previous = scale_factor
        return GuardResult(scale_factor)

    def _reject(self, velocity: float, code: ErrorCode) -> GuardResult:
        return GuardResult(
            value=self.previous,
            is_abnormal=True,
            error_code=code,
            corrected_velocity=velocity * self.previous,
        )


class OffsetGuard:
    """Replaces a non-finite offset by the last finite one (initially 0)."""

    def __init__(self, initial: float = 0.0) -> None:
        self.previous = initial

    def check(self, offset: float) -> GuardResult:
        """Judge one offset estimate."""
        if not math.isfinite(offset):
            return GuardResult(self.previous, True, ErrorCode.NAN_OR_INFINITE)
        self.previous = offset
        return GuardResult(offset)


class InputWatchdog:
    """Tracks whether IMU and velocity inputs keep arriving together.

    Called periodically with the latest stamps of both inputs; the inputs are
    healthy while each stamp moved less than ``deadlock_time`` since the last
    tick and the two stamps lie within ``deadlock_time`` of each other.
    """

    def __init__(self, deadlock_time: float = DEFAULT_DEADLOCK_TIME) -> None:
        self.deadlock_time = deadlock_time
        self.imu_time_last = 0.0
        self.velocity_time_last = 0.0
        self.input_status = False

    def tick(self, imu_time: float, velocity_time: float) -> bool:
        """Update and return the input status for the latest stamps."""
        limit = self.deadlock_time
        self.input_status = (
            abs(imu_time - self.imu_time_last) < limit
            and abs(velocity_time - self.velocity_time_last) < limit
            and abs(velocity_time - imu_time) < limit
        )
        if imu_time != self.imu_time_last:
            self.imu_time_last = imu_time
        if velocity_time != self.velocity_time_last:
            self.velocity_time_last = velocity_time
        return self.input_status