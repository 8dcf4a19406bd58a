# deadreckon

Building blocks for dead reckoning on wheeled robots: plain sensor message
types, rotation helpers, the YAML configuration of an odometry/IMU filter,
lidar-mapping parameters, and GPS coordinate conversions between geodetic
(LLA), earth-centred (ECEF) and local east-north-up (ENU) frames.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `deadreckon.messages`: dataclasses `Vector3`, `Quaternion` (identity by
  default, with `as_array()` giving `[w, x, y, z]` and `normalized()`),
  `ImuMessage`, `EncoderMessage` and `Odometry`. Timestamps are seconds as
  floats.
- `deadreckon.rotation`: numpy helpers working on 3-vectors, 3x3 matrices and
  quaternions ordered `[w, x, y, z]`: `skew`, `r_to_ypr` / `ypr_to_r`
  (yaw-pitch-roll in degrees), `euler_angles_to_rotation_matrix` /
  `rotation_matrix_to_euler_angles` (roll-pitch-yaw in radians),
  `gravity_to_rotation`, `quaternion_multiply`, `quaternion_to_matrix`,
  `matrix_to_quaternion`, `delta_quaternion`, `euler_angles_zyx` and
  `normalize_rotation`. Inputs of the wrong shape raise `ValueError`.
- `deadreckon.config`: `FilterConfig` with its parts `PriorCovariance`,
  `ProcessNoise`, `MeasurementNoise` and `MotionConstraint`.
  `load_config(path)` reads a YAML file, `FilterConfig.from_mapping(data)`
  takes an already parsed document, and `summary()` lists the noise
  settings. Every entry is required; a missing or mistyped one raises
  `ConfigError` (a `ValueError`).
- `deadreckon.params`: `ParamServer`, the mapping settings with their
  defaults, built with `ParamServer.from_mapping` from names such as
  `lio_sam/N_SCAN`; `SensorType` (`velodyne`, `ouster`, `livox`, anything
  else raises `ValueError`); `imu_converter` returning an IMU message with a
  unit orientation; `Point` and `point_distance`.
- `deadreckon.gps`: `NavSatFix` and `GpsTools`. The first fix with status 1,
  2, 4 or 5 becomes the origin; later ones are turned into ENU positions by
  `update_gps_pose`, which returns the position or `None`.

## Example

```python
from deadreckon.config import load_config
from deadreckon.gps import GpsTools, NavSatFix
from deadreckon.rotation import r_to_ypr, ypr_to_r

config = load_config("filter.yaml")
print(config.summary())

r = ypr_to_r([90.0, 0.0, 0.0])
print(r_to_ypr(r))  # [90. 0. 0.]

gps = GpsTools()
gps.update_gps_pose(NavSatFix(latitude=37.0, longitude=127.0, altitude=50.0, status=4))
enu = gps.update_gps_pose(NavSatFix(latitude=37.0001, longitude=127.0, altitude=50.0, status=4))
print(enu)  # roughly 11 m north of the origin
```

## What it does not do

The package provides the pieces a dead-reckoning filter is built from, but
not the filter itself: there is no error-state Kalman filter, no wheel
encoder odometer, no synchronisation of IMU and odometry streams, and no
command-line program. Nothing subscribes to or publishes sensor topics.