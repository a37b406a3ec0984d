"""
Location-related domain exceptions.
"""


class LocationError(Exception):
    """Base exception for location verification errors."""

    pass


class LocationUnresolvedError(LocationError):
    """Raised when an address, coordinate pair or place id cannot be verified."""

    def __init__(self, reference: str, reason: str = "location could not be resolved"):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Unable to resolve location '{reference}': {reason}")
