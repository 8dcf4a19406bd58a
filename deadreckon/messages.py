"""Sensor message types exchanged between the filter and its inputs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


@dataclass
class Vector3:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_array(self) -> np.ndarray:
        """Return the vector as a float numpy array ``[x, y, z]``."""
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass
class Quaternion:
    """A rotation quaternion; the default is the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def as_array(self) -> np.ndarray:
        """Return the quaternion as a numpy array ``[w, x, y, z]``."""
        return np.array([self.w, self.x, self.y, self.z], dtype=float)

    def normalized(self) -> Quaternion:
        """Return a unit-length copy of this quaternion."""
        norm = math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)
        if norm == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.x / norm, self.y / norm, self.z / norm, self.w / norm)


@dataclass
class ImuMessage:
    """An inertial measurement with its timestamp in seconds."""

    stamp: float = 0.0
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: Vector3 = field(default_factory=Vector3)
    linear_acceleration: Vector3 = field(default_factory=Vector3)


@dataclass
class EncoderMessage:
    """Cumulative wheel encoder ticks at a timestamp in seconds."""

    stamp: float = 0.0
    left_count: int = 0
    right_count: int = 0


@dataclass
class Odometry:
    """A pose and twist estimate in a named frame."""

    stamp: float = 0.0
    frame_id: str = ""
    child_frame_id: str = ""
    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)
    linear_velocity: Vector3 = field(default_factory=Vector3)
    angular_velocity: Vector3 = field(default_factory=Vector3)