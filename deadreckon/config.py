"""Filter configuration: topics, wheel encoder geometry and noise levels."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import Any, Callable, Mapping

import yaml

_TRUE_WORDS = frozenset({"y", "yes", "true", "on"})
_FALSE_WORDS = frozenset({"n", "no", "false", "off"})


class ConfigError(ValueError):
    """Raised when a configuration entry is missing or has the wrong type."""


def _as_float(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{path}: expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{path}: expected a number, got {value!r}")


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{path}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{path}: expected an integer, got {value!r}")


def _as_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ConfigError(f"{path}: expected a boolean, got {value!r}")


def _as_str(value: Any, path: str) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple)):
        raise ConfigError(f"{path}: expected a string, got {value!r}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _read(data: Mapping[str, Any], convert: Callable[[Any, str], Any], *keys: str) -> Any:
    node: Any = data
    path = ".".join(keys)
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            raise ConfigError(f"missing configuration entry: {path}")
        node = node[key]
    return convert(node, path)


@dataclass(frozen=True)
class PriorCovariance:
    """Initial variances of the error state blocks."""

    position: float
    velocity: float
    orientation: float
    epsilon: float
    delta: float


@dataclass(frozen=True)
class ProcessNoise:
    """Process noise variances of the IMU and its biases."""

    gyro: float
    accel: float
    bias_accel: float
    bias_gyro: float


@dataclass(frozen=True)
class MeasurementNoise:
    """Measurement noise variances of the odometry observations."""

    pose_position: float
    pose_orientation: float
    position: float
    velocity: float


@dataclass(frozen=True)
class MotionConstraint:
    """Non-holonomic constraint switch and its angular rate threshold."""

    activated: bool
    w_b_thresh: float


@dataclass(frozen=True)
class FilterConfig:
    """All settings the odometry/IMU fusion reads at start-up."""

    imu_topic: str
    encoder_topic: str
    odom_or_vel: bool
    encoder_resolution: int
    encoder_left_wheel_diameter: float
    encoder_right_wheel_diameter: float
    encoder_wheel_base: float
    prior: PriorCovariance
    process: ProcessNoise
    measurement: MeasurementNoise
    motion_constraint: MotionConstraint

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FilterConfig:
        """Build a configuration from a parsed YAML document.

        Every entry is required; a missing or mistyped one raises ConfigError.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        cov = ("covariance",)
        prior = PriorCovariance(
            position=_read(data, _as_float, *cov, "prior", "pos"),
            velocity=_read(data, _as_float, *cov, "prior", "vel"),
            orientation=_read(data, _as_float, *cov, "prior", "ori"),
            epsilon=_read(data, _as_float, *cov, "prior", "epsilon"),
            delta=_read(data, _as_float, *cov, "prior", "delta"),
        )
        process = ProcessNoise(
            accel=_read(data, _as_float, *cov, "process", "accel"),
            gyro=_read(data, _as_float, *cov, "process", "gyro"),
            bias_accel=_read(data, _as_float, *cov, "process", "bias_accel"),
            bias_gyro=_read(data, _as_float, *cov, "process", "bias_gyro"),
        )
        measurement = MeasurementNoise(
            pose_position=_read(data, _as_float, *cov, "measurement", "pose", "pos"),
            pose_orientation=_read(data, _as_float, *cov, "measurement", "pose", "ori"),
            position=_read(data, _as_float, *cov, "measurement", "pos"),
            velocity=_read(data, _as_float, *cov, "measurement", "vel"),
        )
        motion_constraint = MotionConstraint(
            activated=_read(data, _as_bool, "motion_constraint", "activated"),
            w_b_thresh=_read(data, _as_float, "motion_constraint", "w_b_thresh"),
        )
        return cls(
            imu_topic=_read(data, _as_str, "imu_topic"),
            encoder_topic=_read(data, _as_str, "ENCODER_TOPIC"),
            odom_or_vel=_read(data, _as_bool, "odom_or_vel"),
            encoder_resolution=_read(data, _as_int, "Encoder_resolution"),
            encoder_left_wheel_diameter=_read(data, _as_float, "Encoder_left_wheel_diameter"),
            encoder_right_wheel_diameter=_read(data, _as_float, "Encoder_right_wheel_diameter"),
            encoder_wheel_base=_read(data, _as_float, "Encoder_wheel_base"),
            prior=prior,
            process=process,
            measurement=measurement,
            motion_constraint=motion_constraint,
        )

    def summary(self) -> str:
        """Return a human-readable listing of the noise settings."""
        p, q, m, c = self.prior, self.process, self.measurement, self.motion_constraint
        lines = [
            "",
            f"\tprior cov. pos.: {p.position:g}",
            f"\tprior cov. vel.: {p.velocity:g}",
            f"\tprior cov. ori: {p.orientation:g}",
            f"\tprior cov. epsilon.: {p.epsilon:g}",
            f"\tprior cov. delta.: {p.delta:g}",
            "",
            f"\tprocess noise gyro.: {q.gyro:g}",
            f"\tprocess noise accel.: {q.accel:g}",
            "",
            "\tmeasurement noise pose.: ",
            f"\t\tpos: {m.pose_position:g}, ori.: {m.pose_orientation:g}",
            f"\tmeasurement noise pos.: {m.position:g}",
            f"\tmeasurement noise vel.: {m.velocity:g}",
            "",
            "\tmotion constraint: ",
            f"\t\tactivated: {'true' if c.activated else 'false'}",
            f"\t\tw_b threshold: {c.w_b_thresh:g}",
            "",
        ]
        return "\n".join(lines) + "\n"


def load_config(path: str | PathLike[str]) -> FilterConfig:
    """Read a YAML configuration file into a FilterConfig."""
    with open(path, encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path}: configuration must be a mapping")
    return FilterConfig.from_mapping(data)