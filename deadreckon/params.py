"""Mapping parameters and small point and IMU helpers."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping

import numpy as np

from deadreckon.messages import ImuMessage

FLT_MAX = 3.4028234663852886e38


class SensorType(Enum):
    """Supported lidar families."""

    VELODYNE = "velodyne"
    OUSTER = "ouster"
    LIVOX = "livox"


@dataclass
class Point:
    """A lidar point with intensity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    intensity: float = 0.0


def _param(key: str, default: Any, convert=None):
    return field(default=default, metadata={"key": key, "convert": convert})


def _parse_sensor(value: Any) -> SensorType:
    try:
        return SensorType(str(value))
    except ValueError:
        raise ValueError(
            "Invalid sensor type (must be either 'velodyne' or 'ouster' or 'livox'): "
            f"{value}"
        ) from None


def _parse_transform(value: Any) -> np.ndarray | None:
    values = list(value) if value is not None else []
    if not values:
        return None
    if len(values) != 16:
        raise ValueError(f"a 4x4 transform needs 16 values, got {len(values)}")
    return np.array(values, dtype=float).reshape(4, 4)


@dataclass
class ParamServer:
    """Topic, frame, sensor and mapping settings with their defaults."""

    sensor: SensorType = field(metadata={"key": "lio_sam/sensor", "convert": _parse_sensor})

    robot_id: str = _param("/robot_id", "roboat", str)

    point_cloud_left_topic: str = _param("live_slam/pointCloudLeftTopic", "ns2/velodyne_points", str)
    point_cloud_right_topic: str = _param("live_slam/pointCloudRightTopic", "ns1/velodyne_points", str)
    imu_topic: str = _param("lio_sam/imuTopic", "imu_correct", str)
    odom_topic: str = _param("lio_sam/odomTopic", "odometry/imu", str)
    gps_topic: str = _param("lio_sam/gpsTopic", "odometry/gps", str)
    gps_fix_topic: str = _param("lio_sam/gpsFixTopic", "/vrs_gps_data", str)
    wheel_odom_topic: str = _param("lio_sam/wheelOdomTopic", "/wheel_odom", str)

    lidar_frame: str = _param("lio_sam/lidarFrame", "base_link", str)
    baselink_frame: str = _param("lio_sam/baselinkFrame", "base_link", str)
    odometry_frame: str = _param("lio_sam/odometryFrame", "odom", str)
    map_frame: str = _param("lio_sam/mapFrame", "map", str)

    use_imu_heading_initialization: bool = _param("lio_sam/useImuHeadingInitialization", False, bool)
    use_gps: bool = _param("lio_sam/useGPS", False, bool)
    use_gps_elevation: bool = _param("lio_sam/useGpsElevation", False, bool)
    gps_cov_threshold: float = _param("lio_sam/gpsCovThreshold", 2.0, float)
    pose_cov_threshold: float = _param("lio_sam/poseCovThreshold", 25.0, float)

    use_lidar_odom: bool = _param("lio_sam/useLidarOdom", False, bool)
    use_wheel_odom: bool = _param("lio_sam/useWheelOdom", False, bool)

    save_pcd: bool = _param("lio_sam/savePCD", False, bool)
    save_pcd_directory: str = _param("lio_sam/savePCDDirectory", "/Downloads/LOAM/", str)

    n_scan: int = _param("lio_sam/N_SCAN", 16, int)
    horizon_scan: int = _param("lio_sam/Horizon_SCAN", 1800, int)
    downsample_rate: int = _param("lio_sam/downsampleRate", 1, int)
    lidar_min_range: float = _param("lio_sam/lidarMinRange", 1.0, float)
    lidar_max_range: float = _param("lio_sam/lidarMaxRange", 1000.0, float)

    imu_acc_noise: float = _param("lio_sam/imuAccNoise", 0.01, float)
    imu_gyr_noise: float = _param("lio_sam/imuGyrNoise", 0.001, float)
    imu_acc_bias_n: float = _param("lio_sam/imuAccBiasN", 0.0002, float)
    imu_gyr_bias_n: float = _param("lio_sam/imuGyrBiasN", 0.00003, float)
    imu_gravity: float = _param("lio_sam/imuGravity", 9.80511, float)
    imu_rpy_weight: float = _param("lio_sam/imuRPYWeight", 0.01, float)
    z_weight: float = _param("lio_sam/zWeight", 0.99, float)
    imu_frequency: float = _param("lio_sam/imuFrequency", 500.0, float)

    right_lidar_to_imu: np.ndarray | None = _param("lio_sam/right_lidar_to_imu", None, _parse_transform)
    left_lidar_to_imu: np.ndarray | None = _param("lio_sam/left_lidar_to_imu", None, _parse_transform)

    edge_threshold: float = _param("lio_sam/edgeThreshold", 0.1, float)
    surf_threshold: float = _param("lio_sam/surfThreshold", 0.1, float)
    edge_feature_min_valid_num: int = _param("lio_sam/edgeFeatureMinValidNum", 10, int)
    surf_feature_min_valid_num: int = _param("lio_sam/surfFeatureMinValidNum", 100, int)

    odometry_surf_leaf_size: float = _param("lio_sam/odometrySurfLeafSize", 0.2, float)
    mapping_corner_leaf_size: float = _param("lio_sam/mappingCornerLeafSize", 0.2, float)
    mapping_surf_leaf_size: float = _param("lio_sam/mappingSurfLeafSize", 0.2, float)

    z_tolerance: float = _param("lio_sam/z_tollerance", FLT_MAX, float)
    rotation_tolerance: float = _param("lio_sam/rotation_tollerance", FLT_MAX, float)

    number_of_cores: int = _param("lio_sam/numberOfCores", 2, int)
    mapping_process_interval: float = _param("lio_sam/mappingProcessInterval", 0.15, float)

    surrounding_keyframe_adding_dist_threshold: float = _param(
        "lio_sam/surroundingkeyframeAddingDistThreshold", 1.0, float
    )
    surrounding_keyframe_adding_angle_threshold: float = _param(
        "lio_sam/surroundingkeyframeAddingAngleThreshold", 0.2, float
    )
    surrounding_keyframe_density: float = _param("lio_sam/surroundingKeyframeDensity", 1.0, float)
    surrounding_keyframe_search_radius: float = _param(
        "lio_sam/surroundingKeyframeSearchRadius", 50.0, float
    )

    loop_closure_enable_flag: bool = _param("lio_sam/loopClosureEnableFlag", False, bool)
    loop_closure_frequency: float = _param("lio_sam/loopClosureFrequency", 1.0, float)
    surrounding_keyframe_size: int = _param("lio_sam/surroundingKeyframeSize", 50, int)
    history_keyframe_search_radius: float = _param("lio_sam/historyKeyframeSearchRadius", 10.0, float)
    history_keyframe_search_time_diff: float = _param(
        "lio_sam/historyKeyframeSearchTimeDiff", 30.0, float
    )
    history_keyframe_search_num: int = _param("lio_sam/historyKeyframeSearchNum", 25, int)
    history_keyframe_fitness_score: float = _param("lio_sam/historyKeyframeFitnessScore", 0.3, float)

    global_map_visualization_search_radius: float = _param(
        "lio_sam/globalMapVisualizationSearchRadius", 1e3, float
    )
    global_map_visualization_pose_density: float = _param(
        "lio_sam/globalMapVisualizationPoseDensity", 10.0, float
    )
    global_map_visualization_leaf_size: float = _param(
        "lio_sam/globalMapVisualizationLeafSize", 1.0, float
    )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> ParamServer:
        """Build settings from parameter names such as ``lio_sam/N_SCAN``.

        Missing names take their defaults; the sensor must be one of
        ``velodyne``, ``ouster`` or ``livox``, otherwise ValueError is raised.
        """
        values = {}
        for f in fields(cls):
            key = f.metadata["key"]
            convert = f.metadata["convert"]
            if key in params:
                values[f.name] = convert(params[key])
            elif f.name == "sensor":
                values[f.name] = convert("")
            else:
                values[f.name] = f.default
        return cls(**values)

    def imu_converter(self, imu: ImuMessage) -> ImuMessage:
        """Return a copy of the IMU message with a unit orientation."""
        converted = copy.deepcopy(imu)
        converted.orientation = imu.orientation.normalized()
        return converted


def point_distance(p: Point, q: Point | None = None) -> float:
    """Distance of ``p`` from the origin, or from ``q`` when given."""
    if q is None:
        return math.sqrt(p.x * p.x + p.y * p.y + p.z * p.z)
    return math.sqrt((p.x - q.x) ** 2 + (p.y - q.y) ** 2 + (p.z - q.z) ** 2)