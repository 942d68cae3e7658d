# island_tiler/errors.py

class IslandTilerError(Exception):
    """Base error for the island tiler."""


class ConfigurationError(IslandTilerError):
    """Raised when grid dimensions or generation parameters are invalid."""
