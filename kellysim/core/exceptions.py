"""Domain errors for the simulator."""


class InvalidConfiguration(ValueError):
    """Raised when simulation parameters are out of range or nonsensical.

    Always raised before any simulation work starts, so callers never see a
    partially computed result.
    """
