"""Error taxonomy — every failure the CLI reports with exit code 1."""


class LbranchError(RuntimeError):
    """Base for errors printed to the user as a plain message."""


class UsageError(LbranchError):
    """Bad or missing command-line arguments."""


class ConfigError(LbranchError):
    """Missing credentials or unusable workspace configuration."""


class NotFoundError(LbranchError):
    """Tracker lookup by identifier returned nothing."""


class ValidationError(LbranchError):
    """Required input was left empty."""


class TransportError(LbranchError):
    """Linear HTTP or GraphQL failure."""


class SubprocessError(LbranchError):
    """A git invocation exited non-zero."""
