"""Domain exceptions."""


class FarmZoneError(Exception):
    """Base class for farm zone classification errors."""


class EmptyYieldData(FarmZoneError, ValueError):
    """Raised when a record has no yields; average yield and consistency are undefined."""


class FarmProfileNotFound(FarmZoneError, LookupError):
    """Raised when a farm profile id is unknown."""


class FarmZoneNotFound(FarmZoneError, LookupError):
    """Raised when a farm zone id is unknown."""


class FarmZoneAlreadyExists(FarmZoneError, ValueError):
    """Raised when creating a second zone for the same farm profile."""
