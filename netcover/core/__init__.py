from .errors import NetcoverError, ConfigurationError, PreconditionError
from .config import NetworkConfig, MAX_ALLOWED_PLOT_POINT, MIN_PLOT_LENGTH_PT, MARKER_DIAM_PX
from .entities import Station, Device, default_station, default_device
from .geometry import distance, scale_point
from .coverage import Assignment, CoverageIndex, connection_speed, resolve, coverage_stats
from .scaler import PixelOffset, max_plot_point, project, ring_radius_px
from .model import NetworkModel

__all__ = [
    "NetcoverError", "ConfigurationError", "PreconditionError",
    "NetworkConfig", "MAX_ALLOWED_PLOT_POINT", "MIN_PLOT_LENGTH_PT", "MARKER_DIAM_PX",
    "Station", "Device", "default_station", "default_device",
    "distance", "scale_point",
    "Assignment", "CoverageIndex", "connection_speed", "resolve", "coverage_stats",
    "PixelOffset", "max_plot_point", "project", "ring_radius_px",
    "NetworkModel",
]
