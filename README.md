# eagleye

Building blocks for GNSS/IMU vehicle localization. The package covers the
data formats and bookkeeping around a localization pipeline.

## Modules

- **`eagleye.nmea`**: NMEA conversion. `convert_sentence(sentence, stamp)`
  takes a block of sentences separated by newlines and returns a
  `ConversionResult`. GGA lines fill its `gga` (`Gga`) and `fix`
  (`NavSatFix`) records, and RMC lines fill its `rmc` (`Rmc`) record. Lines
  with no latitude and no longitude are skipped. A line with too few fields
  raises `ValueError`. The fix status is 0 for GPS quality 4 and -1 for any
  other value. The fix altitude is the altitude plus the undulation.
  - `parse_nmea_degrees` turns `dddmm.mmmm` values into decimal degrees.
  - `string_to_gps_time` turns an `hhmmss.ss` field into epoch seconds. It
    takes the date from the header time in local time, shifts the hour by nine
    and adds `LEAP_SECONDS` (18).
- **`eagleye.kml`**: KML tracks.
  - `KmlGenerator(name, color)` collects points into one line string.
    `add_point` adds a point, `body()` returns the placemark section,
    `document()` returns the whole document and `write(filename)` writes it.
  - `write_kml(name, filename, body)` wraps an existing body in a document.
  - `DistanceGatedTrack` adds a fix and rewrites the file only when the
    recorded distance has grown by more than its interval (0.2 m by default).
- **`eagleye.config`**: parameter loading. `load_config(path)` reads the YAML
  parameter file; its parameters sit under `/**` → `ros__parameters`.
  `slip_coefficient_config`, `smoothing_config`, `trajectory_config`,
  `velocity_scale_factor_config`, `yaw_rate_offset_config(config, stage)`
  (`stage` is `"1st"` or `"2nd"`) and `yaw_rate_offset_stop_config` each
  build one frozen parameter dataclass. A missing, unreadable or mistyped
  entry raises `ConfigError`. `GnssMode` recognises `rtklib`/`RTKLIB` and
  `nmea`/`NMEA`.
- **`eagleye.geometry`**: geometry and IMU/twist handling.
  - `Vector3`, `Quaternion` (with `rotate` and `*`), `quaternion_from_rpy`
    and `Transform` (with `apply` and `*`) provide the vector and rotation
    types.
  - `convert_imu(imu, transform, reverse_wz)` rotates an `Imu` reading's
    rates and accelerations into the base frame. It can also flip the sign of
    the yaw rate.
  - `TwistRelay` accepts a `TwistType` and re-emits incoming twists as
    stamped twists.
- **`eagleye.pose`**: pose output.
  - `projection_settings` validates the plane, `tf_num`, height conversion
    and geoid options.
  - `fix_is_accepted` judges a fix by its status or by its covariance.
  - `heading_to_yaw` turns a heading measured clockwise from north into an
    ENU yaw and adds an optional meridian convergence.
  - `pose_covariance` builds the 6×6 covariance.
  - `apply_sensor_offset` moves a `Pose` from the antenna to the base frame.
- **`eagleye.gnss`**: GNSS source checks.
  - `select_sources` validates the velocity source type (`VelocitySource`)
    and the position source type (`LlhSource`) for a main or sub antenna. An
    invalid combination raises `GnssSourceError`.
  - `has_position_covariance`, `accept_twist` and `accept_navpvt` screen
    incoming data.
- **`eagleye.guards`**: output guards.
  - `ScaleFactorGuard` replaces a non-finite scale factor, or one more than
    the threshold percent away from 1, with the last accepted value. It then
    rescales the velocity with that value.
  - `OffsetGuard` replaces a non-finite offset with the last finite one.
  - `InputWatchdog.tick` reports whether the IMU and velocity stamps are
    still advancing together.
- **`eagleye.scale_store`**: scale factor storage.
  - `save_scale_factor` and `load_scale_factor` write and read the
    four-line scale factor file.
  - `ScaleFactorSaver.on_timer` saves the value when the estimate is enabled
    or newer than the saved one. Otherwise it empties the file.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Writing a KML track

```python
from eagleye.kml import KmlGenerator

track = KmlGenerator("drive", "ff0000ff")
track.add_point(139.6917, 35.6895, 40.0)
track.add_point(139.6920, 35.6897, 40.2)
track.write("drive.kml")
```

## Command line

`eagleye-fix2kml` reads a record file, or standard input when the file is
`-` or not given. Each line holds one record:

```
distance 12.5
fix 35.6895 139.6917 40.0
```

Blank lines and lines that start with `#` are ignored. A fix is added to the
track whenever the distance has grown by more than `--interval` metres (0.2
by default) since the last fix that was added. The KML file is rewritten after
each added fix.

```
eagleye-fix2kml records.txt -o drive.kml --kml-name drive --color ff0000ff
```

## What the package does not do

The package does not contain the localization estimators themselves. It has
no heading, position, velocity scale factor, yaw rate offset, slip,
smoothing or trajectory algorithms, only their parameters and output guards.
It does not decode vehicle CAN frames. It does not connect to a message bus
or run as a live node: the functions work on values you pass in. Map
projection and geoid height conversion are not implemented.
`ProjectionSettings` only records which options were chosen.