[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deadreckon"
version = "0.1.0"
description = "Building blocks for wheel-odometry and IMU dead reckoning: message types, rotation helpers, filter configuration and GPS coordinate conversions"
requires-python = ">=3.10"
keywords = ["dead reckoning", "imu", "odometry", "rotation", "quaternion", "gps", "enu", "ecef", "localization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deadreckon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
