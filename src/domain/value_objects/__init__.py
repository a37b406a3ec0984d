"""
Domain value objects package.
"""

from .customer import Customer
from .environmental_flags import EnvironmentalFlags
from .line_item import LineItem
from .location import Coordinates, LocationReference
from .pricing_table import PricingTable, ServiceRate
from .priced_quote import PricedQuote
from .proposal_details import CustomService, ProposalAssets, ProposalInputs, ProposalTotals
from .proposal_status import ProposalStatus
from .provider_type import ProviderType
from .quote_request import QUOTE_DEFAULTS, QuoteDefaults, QuoteOptions, QuoteRequest
from .service_type import ServiceType
from .site_conditions import AccessRisk, PropertyType, TerrainType, VegetationDensity
from .urgency_level import UrgencyLevel

__all__ = [
    "AccessRisk",
    "Coordinates",
    "Customer",
    "CustomService",
    "EnvironmentalFlags",
    "LineItem",
    "LocationReference",
    "PricedQuote",
    "PricingTable",
    "PropertyType",
    "ProposalAssets",
    "ProposalInputs",
    "ProposalStatus",
    "ProposalTotals",
    "ProviderType",
    "QUOTE_DEFAULTS",
    "QuoteDefaults",
    "QuoteOptions",
    "QuoteRequest",
    "ServiceRate",
    "ServiceType",
    "TerrainType",
    "UrgencyLevel",
    "VegetationDensity",
]
