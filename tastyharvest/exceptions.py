class TastyHarvestError(Exception):
    """Base exception for tastyharvest."""

    pass


class ConfigurationError(TastyHarvestError):
    """Raised when a source is misconfigured or the listing metadata is unusable."""

    pass


class HarvesterError(TastyHarvestError):
    """Raised when harvesting operations fail."""

    pass
