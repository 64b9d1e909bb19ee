"""GNSS/IMU localization helpers: NMEA conversion, KML tracks, parameter loading, pose output and estimator output guards."""

__version__ = "0.1.0"