"""
Provider type value object.
"""

from enum import Enum


class ProviderType(str, Enum):
    """External provider implementations."""

    MOCK = "mock"
    GOOGLE_MAPS = "google_maps"
    STRIPE = "stripe"
    RESEND = "resend"

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return {
            self.MOCK: "Mock Provider",
            self.GOOGLE_MAPS: "Google Maps",
            self.STRIPE: "Stripe",
            self.RESEND: "Resend",
        }.get(self, self.value.title())

    @property
    def requires_auth(self) -> bool:
        """Check if provider requires an API key."""
        return self != self.MOCK
