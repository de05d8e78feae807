"""
Domain exceptions for market-data acquisition and call analysis.
Zero external dependencies.
"""


class MarketDataError(Exception):
    """Base class for failures surfaced by the market-data layer."""


class ProviderPayloadError(MarketDataError, ValueError):
    """The provider answered, but the payload did not have the expected shape."""


class InvalidCallError(ValueError):
    """A configured call cannot be analysed (e.g. non-positive entry price)."""


class SnapshotUnavailableError(MarketDataError):
    """The snapshot could not be produced before the inbound deadline."""
