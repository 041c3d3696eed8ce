"""
Exceptions raised by the flocking core.
"""


class ConfigurationError(ValueError):
    """Raised when a flock is constructed from invalid parameters."""
