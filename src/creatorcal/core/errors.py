class CreatorCalError(Exception):
    """Base error."""

class BeforeEpochError(CreatorCalError, ValueError):
    """Raised when an instant predates the configured calendar epoch."""

class ConfigError(CreatorCalError, ValueError):
    """Raised for invalid calendar tables, rules or arguments."""

class TimeSourceError(CreatorCalError):
    """Raised when the authoritative time source cannot be read."""
