"""Loading of estimator parameters from a parameter YAML file.

The file holds one document whose parameters sit under ``/**`` and then
``ros__parameters``; every ``*_config`` function takes that whole document
as returned by :func:`load_config`.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml

_ROOT = ("/**", "ros__parameters")
_MISSING = object()

_TRUE_WORDS = frozenset(
    {"y", "Y", "yes", "Yes", "YES", "true", "True", "TRUE", "on", "On", "ON"}
)
_FALSE_WORDS = frozenset(
    {"n", "N", "no", "No", "NO", "false", "False", "FALSE", "off", "Off", "OFF"}
)

DEFAULT_SAVE_DURATION = 100.0
DEFAULT_SCALE_FACTOR_PERCENT = 20.0
YAW_RATE_OFFSET_STAGES = ("1st", "2nd")


class ConfigError(Exception):
    """Raised when the parameter file is missing, malformed or incomplete."""


class GnssMode(enum.Enum):
    """The GNSS message family used for velocity scale factor estimation."""

    RTKLIB = "rtklib"
    NMEA = "nmea"

    @classmethod
    def from_text(cls, text: str) -> Optional["GnssMode"]:
        """Recognise ``rtklib``/``RTKLIB`` and ``nmea``/``NMEA``; else None."""
        if text in ("rtklib", "RTKLIB"):
            return cls.RTKLIB
        if text in ("nmea", "NMEA"):
            return cls.NMEA
        return None


@dataclass(frozen=True)
class SlipCoefficientParameter:
    use_can_less_mode: bool
    imu_rate: float
    stop_judgment_threshold: float
    moving_judgment_threshold: float
    estimated_minimum_interval: float
    estimated_maximum_interval: float
    curve_judgment_threshold: float
    lever_arm: float


@dataclass(frozen=True)
class SmoothingParameter:
    use_can_less_mode: bool
    ecef_base_pos_x: float
    ecef_base_pos_y: float
    ecef_base_pos_z: float
    gnss_rate: float
    moving_judgment_threshold: float
    moving_average_time: float
    moving_ratio_threshold: float


@dataclass(frozen=True)
class TrajectoryParameter:
    use_can_less_mode: bool
    stop_judgment_threshold: float
    curve_judgment_threshold: float
    sensor_noise_velocity: float
    sensor_scale_noise_velocity: float
    sensor_noise_yaw_rate: float
    sensor_bias_noise_yaw_rate: float
    timer_update_rate: float


@dataclass(frozen=True)
class VelocityScaleFactorParameter:
    """Scale factor settings; ``use_gnss_mode`` is None for unknown modes,
    in which case no estimation takes place."""

    use_gnss_mode: Optional[GnssMode]
    imu_rate: float
    gnss_rate: float
    moving_judgment_threshold: float
    estimated_minimum_interval: float
    estimated_maximum_interval: float
    gnss_receiving_threshold: float
    save_velocity_scale_factor: bool = False
    velocity_scale_factor_save_str: str = ""
    velocity_scale_factor_save_duration: float = DEFAULT_SAVE_DURATION
    th_velocity_scale_factor_percent: float = DEFAULT_SCALE_FACTOR_PERCENT


@dataclass(frozen=True)
class YawrateOffsetParameter:
    imu_rate: float
    gnss_rate: float
    moving_judgment_threshold: float
    estimated_minimum_interval: float
    estimated_maximum_interval: float
    gnss_receiving_threshold: float
    outlier_threshold: float


@dataclass(frozen=True)
class YawrateOffsetStopParameter:
    imu_rate: float
    stop_judgment_threshold: float
    estimated_interval: float
    outlier_threshold: float


def load_config(path: Union[str, Path]) -> Mapping:
    """Read and parse the parameter file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(document, Mapping):
        raise ConfigError(f"{path} does not hold a mapping")
    return document


def _find(config: Any, keys: Tuple[str, ...]) -> Any:
    node = config
    path = _ROOT + keys
    for depth, key in enumerate(path):
        if not isinstance(node, Mapping):
            raise ConfigError(f"{'.'.join(path[:depth])} is not a mapping")
        if key not in node:
            return _MISSING
        node = node[key]
    return node


def _name(keys: Tuple[str, ...]) -> str:
    return ".".join(keys)


def _value(config: Any, keys: Tuple[str, ...]) -> Any:
    value = _find(config, keys)
    if value is _MISSING:
        raise ConfigError(f"missing parameter {_name(keys)}")
    return value


def _to_float(value: Any, keys: Tuple[str, ...]) -> float:
    if isinstance(value, bool) or value is None:
        raise ConfigError(f"parameter {_name(keys)} is not a number: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"parameter {_name(keys)} is not a number: {value!r}")


def _to_bool(value: Any, keys: Tuple[str, ...]) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
    raise ConfigError(f"parameter {_name(keys)} is not a boolean: {value!r}")


def _to_str(value: Any, keys: Tuple[str, ...]) -> str:
    if value is None or isinstance(value, (Mapping, list)):
        raise ConfigError(f"parameter {_name(keys)} is not a scalar: {value!r}")
    return str(value)


def _float(config: Any, *keys: str) -> float:
    return _to_float(_value(config, keys), keys)


def _bool(config: Any, *keys: str) -> bool:
    return _to_bool(_value(config, keys), keys)


def _optional(config: Any, convert, default: Any, *keys: str) -> Any:
    value = _find(config, keys)
    if value is _MISSING:
        return default
    return convert(value, keys)


def slip_coefficient_config(config: Mapping) -> SlipCoefficientParameter:
    """Parameters of the slip coefficient estimator."""
    return SlipCoefficientParameter(
        use_can_less_mode=_bool(config, "use_can_less_mode"),
        imu_rate=_float(config, "common", "imu_rate"),
        stop_judgment_threshold=_float(config, "common", "stop_judgment_threshold"),
        moving_judgment_threshold=_float(config, "common", "moving_judgment_threshold"),
        estimated_minimum_interval=_float(
            config, "slip_coefficient", "estimated_minimum_interval"
        ),
        estimated_maximum_interval=_float(
            config, "slip_coefficient", "estimated_maximum_interval"
        ),
        curve_judgment_threshold=_float(
            config, "slip_coefficient", "curve_judgment_threshold"
        ),
        lever_arm=_float(config, "slip_coefficient", "lever_arm"),
    )


def smoothing_config(config: Mapping) -> SmoothingParameter:
    """Parameters of the GNSS position smoother."""
    return SmoothingParameter(
        use_can_less_mode=_bool(config, "use_can_less_mode"),
        ecef_base_pos_x=_float(config, "ecef_base_pos", "x"),
        ecef_base_pos_y=_float(config, "ecef_base_pos", "y"),
        ecef_base_pos_z=_float(config, "ecef_base_pos", "z"),
        gnss_rate=_float(config, "common", "gnss_rate"),
        moving_judgment_threshold=_float(config, "common", "moving_judgment_threshold"),
        moving_average_time=_float(config, "smoothing", "moving_average_time"),
        moving_ratio_threshold=_float(config, "smoothing", "moving_ratio_threshold"),
    )


def trajectory_config(config: Mapping) -> TrajectoryParameter:
    """Parameters of the relative trajectory estimator."""
    return TrajectoryParameter(
        use_can_less_mode=_bool(config, "use_can_less_mode"),
        stop_judgment_threshold=_float(config, "common", "stop_judgment_threshold"),
        curve_judgment_threshold=_float(config, "trajectory", "curve_judgment_threshold"),
        sensor_noise_velocity=_float(config, "trajectory", "sensor_noise_velocity"),
        sensor_scale_noise_velocity=_float(
            config, "trajectory", "sensor_scale_noise_velocity"
        ),
        sensor_noise_yaw_rate=_float(config, "trajectory", "sensor_noise_yaw_rate"),
        sensor_bias_noise_yaw_rate=_float(
            config, "trajectory", "sensor_bias_noise_yaw_rate"
        ),
        timer_update_rate=_float(config, "trajectory", "timer_update_rate"),
    )


def velocity_scale_factor_config(config: Mapping) -> VelocityScaleFactorParameter:
    """Parameters of the velocity scale factor estimator.

    The moving judgment threshold is taken from the common stop judgment
    threshold. Saving options are optional and fall back to their defaults.
    """
    mode_keys = ("use_gnss_mode",)
    mode_text = _to_str(_value(config, mode_keys), mode_keys)
    return VelocityScaleFactorParameter(
        use_gnss_mode=GnssMode.from_text(mode_text),
        imu_rate=_float(config, "common", "imu_rate"),
        gnss_rate=_float(config, "common", "gnss_rate"),
        moving_judgment_threshold=_float(config, "common", "stop_judgment_threshold"),
        estimated_minimum_interval=_float(
            config, "velocity_scale_factor", "estimated_minimum_interval"
        ),
        estimated_maximum_interval=_float(
            config, "velocity_scale_factor", "estimated_maximum_interval"
        ),
        gnss_receiving_threshold=_float(
            config, "velocity_scale_factor", "gnss_receiving_threshold"
        ),
        save_velocity_scale_factor=_optional(
            config, _to_bool, False, "velocity_scale_factor", "save_velocity_scale_factor"
        ),
        velocity_scale_factor_save_str=_optional(
            config, _to_str, "", "velocity_scale_factor_save_str"
        ),
        velocity_scale_factor_save_duration=_optional(
            config,
            _to_float,
            DEFAULT_SAVE_DURATION,
            "velocity_scale_factor",
            "velocity_scale_factor_save_duration",
        ),
        th_velocity_scale_factor_percent=_optional(
            config,
            _to_float,
            DEFAULT_SCALE_FACTOR_PERCENT,
            "velocity_scale_factor",
            "th_velocity_scale_factor_percent",
        ),
    )


def yaw_rate_offset_config(config: Mapping, stage: str) -> YawrateOffsetParameter:
    """Parameters of the moving yaw rate offset estimator for ``stage``.

    ``stage`` is ``"1st"`` or ``"2nd"`` and selects the maximum interval.
    """
    if stage not in YAW_RATE_OFFSET_STAGES:
        raise ConfigError(
            f"unknown yaw rate offset stage {stage!r}, expected one of "
            f"{', '.join(YAW_RATE_OFFSET_STAGES)}"
        )
    return YawrateOffsetParameter(
        imu_rate=_float(config, "common", "imu_rate"),
        gnss_rate=_float(config, "common", "gnss_rate"),
        moving_judgment_threshold=_float(config, "common", "moving_judgment_threshold"),
        estimated_minimum_interval=_float(
            config, "yaw_rate_offset", "estimated_minimum_interval"
        ),
        estimated_maximum_interval=_float(
            config, "yaw_rate_offset", stage, "estimated_maximum_interval"
        ),
        gnss_receiving_threshold=_float(
            config, "yaw_rate_offset", "gnss_receiving_threshold"
        ),
        outlier_threshold=_float(config, "yaw_rate_offset_stop", "outlier_threshold"),
    )


def yaw_rate_offset_stop_config(config: Mapping) -> YawrateOffsetStopParameter:
    """Parameters of the standstill yaw rate offset estimator."""
    return YawrateOffsetStopParameter(
        imu_rate=_float(config, "common", "imu_rate"),
        stop_judgment_threshold=_float(config, "common", "stop_judgment_threshold"),
        estimated_interval=_float(config, "yaw_rate_offset_stop", "estimated_interval"),
        outlier_threshold=_float(config, "yaw_rate_offset_stop", "outlier_threshold"),
    )