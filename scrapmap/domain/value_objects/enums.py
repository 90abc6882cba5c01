"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class AcquisitionSource(str, Enum):
    DEVICE = "device"
    SEARCH = "search"
    MANUAL = "manual"


class AcquisitionPhase(str, Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    RESOLVED = "resolved"
    FAILED = "failed"


class FailureReason(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    INVALID_INPUT = "invalid_input"


class GeolocationErrorCode(int, Enum):
    """Error codes reported by a device location provider (W3C numbering)."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class GeoEncoding(str, Enum):
    PAIR = "pair"
    GEOJSON = "geojson"
    WKT = "wkt"
    WKB = "wkb"


class NoticeLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
