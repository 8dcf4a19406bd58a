import math

import numpy as np
import pytest

from deadreckon.messages import ImuMessage, Quaternion, Vector3
from deadreckon.params import (
    FLT_MAX,
    ParamServer,
    Point,
    SensorType,
    point_distance,
)


def test_defaults_with_valid_sensor():
    params = ParamServer.from_mapping({"lio_sam/sensor": "velodyne"})
    assert params.sensor is SensorType.VELODYNE
    assert params.robot_id == "roboat"
    assert params.imu_topic == "imu_correct"
    assert params.point_cloud_left_topic == "ns2/velodyne_points"
    assert params.gps_fix_topic == "/vrs_gps_data"
    assert params.n_scan == 16
    assert params.horizon_scan == 1800
    assert params.imu_gravity == pytest.approx(9.80511)
    assert params.z_tolerance == FLT_MAX
    assert params.use_gps is False
    assert params.right_lidar_to_imu is None


@pytest.mark.parametrize(
    "name, expected",
    [("velodyne", SensorType.VELODYNE), ("ouster", SensorType.OUSTER), ("livox", SensorType.LIVOX)],
)
def test_sensor_names(name, expected):
    assert ParamServer.from_mapping({"lio_sam/sensor": name}).sensor is expected


@pytest.mark.parametrize("params", [{}, {"lio_sam/sensor": "hokuyo"}])
def test_invalid_sensor_raises(params):
    with pytest.raises(ValueError, match="Invalid sensor type"):
        ParamServer.from_mapping(params)


def test_overrides_are_applied():
    params = ParamServer.from_mapping(
        {
            "lio_sam/sensor": "ouster",
            "lio_sam/N_SCAN": 64,
            "lio_sam/imuTopic": "imu/data",
            "lio_sam/useGPS": True,
            "lio_sam/edgeThreshold": 0.5,
        }
    )
    assert params.n_scan == 64
    assert params.imu_topic == "imu/data"
    assert params.use_gps is True
    assert params.edge_threshold == 0.5


def test_transform_is_row_major():
    values = list(range(16))
    params = ParamServer.from_mapping(
        {"lio_sam/sensor": "livox", "lio_sam/left_lidar_to_imu": values}
    )
    transform = params.left_lidar_to_imu
    assert transform.shape == (4, 4)
    assert transform[0, 1] == values[1]
    assert transform[1, 0] == values[4]
    np.testing.assert_array_equal(transform.ravel(), values)


def test_transform_wrong_size_raises():
    with pytest.raises(ValueError):
        ParamServer.from_mapping(
            {"lio_sam/sensor": "velodyne", "lio_sam/right_lidar_to_imu": [1.0] * 9}
        )


def test_imu_converter_normalizes_orientation():
    params = ParamServer.from_mapping({"lio_sam/sensor": "velodyne"})
    imu = ImuMessage(
        stamp=3.0,
        orientation=Quaternion(x=1.0, y=2.0, z=2.0, w=4.0),
        angular_velocity=Vector3(0.1, 0.2, 0.3),
        linear_acceleration=Vector3(0.0, 0.0, 9.8),
    )
    out = params.imu_converter(imu)
    q = out.orientation.as_array()
    assert np.linalg.norm(q) == pytest.approx(1.0)
    np.testing.assert_allclose(q * 5.0, imu.orientation.as_array())
    assert out.angular_velocity == imu.angular_velocity
    assert out.linear_acceleration == imu.linear_acceleration
    assert out.stamp == imu.stamp
    assert imu.orientation.w == 4.0


def test_imu_converter_zero_quaternion_raises():
    params = ParamServer.from_mapping({"lio_sam/sensor": "velodyne"})
    imu = ImuMessage(orientation=Quaternion(0.0, 0.0, 0.0, 0.0))
    with pytest.raises(ValueError):
        params.imu_converter(imu)


def test_point_distance_from_origin():
    assert point_distance(Point(3.0, 4.0, 0.0)) == pytest.approx(5.0)


def test_point_distance_between_points_is_symmetric():
    a = Point(1.0, -2.0, 0.5, intensity=7.0)
    b = Point(-3.0, 4.0, 2.0)
    assert point_distance(a, b) == pytest.approx(point_distance(b, a))
    assert point_distance(a, a) == 0.0
    shifted = Point(a.x - b.x, a.y - b.y, a.z - b.z)
    assert point_distance(a, b) == pytest.approx(point_distance(shifted))
    assert math.isclose(point_distance(a, Point()), point_distance(a))