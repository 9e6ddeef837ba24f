"""
Error taxonomy shared by the API routes and the alert batch.

ValidationError and StoreFailure surface to HTTP callers; LookupFailure and
TransportFailure are logged and only change a single subscriber's outcome.
"""


class FrostWatchError(Exception):
    pass


class ValidationError(FrostWatchError):
    """Malformed email or ZIP code supplied by a caller."""


class LookupFailure(FrostWatchError):
    """Geocoding or weather service lookup did not produce a usable answer."""


class TransportFailure(FrostWatchError):
    """The outbound email could not be handed to the mail provider."""


class StoreFailure(FrostWatchError):
    """Reading or writing the subscriptions table failed."""
