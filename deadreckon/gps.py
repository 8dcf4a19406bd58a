"""Conversions between geodetic, earth-centred and local ENU coordinates."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

DEG_TO_RAD = 0.01745329252
EARTH_MAJOR = 6378137.0
EARTH_MINOR = 6356752.31424518

_VALID_STATUSES = frozenset({1, 2, 4, 5})
_UNSET_ORIGIN = np.array([1.0, 0.0, 0.0])


def _deg2rad(deg: float) -> float:
    return deg * DEG_TO_RAD


def _rad2deg(rad: float) -> float:
    return rad / DEG_TO_RAD


def _earth_radius(lat: float) -> float:
    return EARTH_MAJOR**2 / math.sqrt(
        (EARTH_MAJOR * math.cos(lat)) ** 2 + (EARTH_MINOR * math.sin(lat)) ** 2
    )


@dataclass
class NavSatFix:
    """A satellite navigation fix in degrees and metres."""

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    status: int = 0


class GpsTools:
    """Tracks a GPS origin and converts fixes into local ENU positions."""

    def __init__(self):
        self.lla_origin = _UNSET_ORIGIN.copy()
        self.gps_pos = np.zeros(3)

    @property
    def has_origin(self) -> bool:
        """Whether an origin has been taken from a fix."""
        return not np.array_equal(self.lla_origin, _UNSET_ORIGIN)

    @staticmethod
    def gps_msg_to_lla(fix: NavSatFix) -> np.ndarray:
        """Return ``[latitude, longitude, altitude]`` from a fix."""
        return np.array([fix.latitude, fix.longitude, fix.altitude], dtype=float)

    def lla_to_ecef(self, lla) -> np.ndarray:
        """Convert latitude/longitude in degrees and altitude to ECEF metres."""
        lat = _deg2rad(lla[0])
        lon = _deg2rad(lla[1])
        alt = lla[2]
        earth_r = _earth_radius(lat)
        return np.array(
            [
                (earth_r + alt) * math.cos(lat) * math.cos(lon),
                (earth_r + alt) * math.cos(lat) * math.sin(lon),
                ((EARTH_MINOR / EARTH_MAJOR) ** 2 * earth_r + alt) * math.sin(lat),
            ]
        )

    def ecef_to_lla(self, ecef) -> np.ndarray:
        """Convert ECEF metres to latitude/longitude in degrees and altitude."""
        x, y, z = (float(c) for c in ecef)
        a2, b2 = EARTH_MAJOR**2, EARTH_MINOR**2
        e = math.sqrt((a2 - b2) / a2)
        e_ = math.sqrt((a2 - b2) / b2)
        p = math.hypot(x, y)
        theta = math.atan2(z * EARTH_MAJOR, p * EARTH_MINOR)
        lon = math.atan2(y, x)
        lat = math.atan2(
            z + e_**2 * EARTH_MINOR * math.sin(theta) ** 3,
            p - e**2 * EARTH_MAJOR * math.cos(theta) ** 3,
        )
        alt = p / math.cos(lat) - _earth_radius(lat)
        return np.array([_rad2deg(lat), _rad2deg(lon), alt])

    def _enu_rotation(self) -> np.ndarray:
        lat = _deg2rad(self.lla_origin[0])
        lon = _deg2rad(self.lla_origin[1])
        return np.array(
            [
                [-math.sin(lon), math.cos(lon), 0.0],
                [-math.cos(lon) * math.sin(lat), -math.sin(lat) * math.sin(lon), math.cos(lat)],
                [math.cos(lon) * math.cos(lat), math.sin(lon) * math.cos(lat), math.sin(lat)],
            ]
        )

    def ecef_to_enu(self, ecef) -> np.ndarray:
        """Express an ECEF point in the east-north-up frame at the origin."""
        offset = np.asarray(ecef, dtype=float) - self.lla_to_ecef(self.lla_origin)
        return self._enu_rotation() @ offset

    def enu_to_ecef(self, enu) -> np.ndarray:
        """Express an east-north-up point at the origin in ECEF."""
        return self._enu_rotation().T @ np.asarray(enu, dtype=float) + self.lla_to_ecef(
            self.lla_origin
        )

    def update_gps_pose(self, fix: NavSatFix) -> np.ndarray | None:
        """Take the first usable fix as origin, later ones as ENU positions.

        Returns the new ENU position, or None when the fix was ignored or
        became the origin.
        """
        if fix.status not in _VALID_STATUSES:
            return None
        lla = self.gps_msg_to_lla(fix)
        if not self.has_origin:
            self.lla_origin = lla
            log.info("GPS origin: %s status: %d", lla, fix.status)
            return None
        self.gps_pos = self.ecef_to_enu(self.lla_to_ecef(lla))
        log.debug("GPS origin: %s current: %s", self.lla_origin, self.gps_pos)
        return self.gps_pos