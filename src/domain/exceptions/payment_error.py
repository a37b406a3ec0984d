"""
Payment-related domain exceptions.
"""


class PaymentError(Exception):
    """Base exception for payment errors."""

    pass


class PaymentInitiationError(PaymentError):
    """Raised when the payment capability cannot open a deposit session."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"Payment provider {provider} failed to initiate payment: {message}")


class PaymentWebhookError(PaymentError):
    """Raised when a payment notification is unsigned, forged or malformed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
