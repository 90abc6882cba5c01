"""Domain exceptions.

Acquisition failures are not exceptions: they are carried as
``FailureReason`` inside ``AcquisitionState``.
"""

from scrapmap.domain.value_objects.enums import GeolocationErrorCode


class DecodeError(ValueError):
    """A persisted geographic value could not be turned into a GeoPoint."""


class UnrecognizedFormatError(DecodeError):
    pass


class OutOfRangeError(DecodeError):
    pass


class SaveError(Exception):
    """Base class for pickup-location write failures."""

    def __init__(self, listing_id: str, message: str):
        super().__init__(message)
        self.listing_id = listing_id


class SaveTransportError(SaveError):
    """The backend could not be reached or rejected the request."""


class NotPersistedError(SaveError):
    """The backend reported success but no row was updated."""


class ListingStoreError(Exception):
    """Raised by listing store adapters when the backend call fails."""


class GeocodingError(Exception):
    """Raised by geocoder adapters when the provider cannot be reached."""


class GeolocationError(Exception):
    def __init__(self, code: GeolocationErrorCode, message: str = ""):
        super().__init__(message or code.name)
        self.code = code


class NoLocationSelectedError(Exception):
    """Confirm was requested before any point was resolved."""
