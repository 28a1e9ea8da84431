"""Error types shared by the maze core."""


class ConfigurationError(ValueError):
    """Broken maze definition or integration bug.

    Raised for malformed matrices, out-of-range placement indices and
    unrecognized move directions. Subclasses ValueError so callers that
    already guard against ValueError keep working.
    """
