"""Root exception shared by every HireMe context."""


class HireMeError(Exception):
    """Base class for all HireMe errors."""

    pass
