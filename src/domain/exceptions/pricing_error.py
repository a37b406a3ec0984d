"""
Pricing-related domain exceptions.
"""


class PricingError(Exception):
    """Base exception for pricing errors."""

    pass


class UnknownEnumError(PricingError):
    """Raised when a pricing lookup receives a value outside its known set."""

    def __init__(self, table: str, value):
        self.table = table
        self.value = value
        super().__init__(f"No '{table}' pricing entry for value '{value}'")
