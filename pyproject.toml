[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eagleye"
version = "0.1.0"
description = "GNSS/IMU localization helpers: NMEA conversion, KML tracks, parameter loading, pose output and estimator output guards"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "gnss",
    "nmea",
    "kml",
    "imu",
    "localization",
    "dead-reckoning",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
eagleye-fix2kml = "eagleye.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["eagleye"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
