"""Generate quote use case implementation."""

import time

from src.application.services.quote_assembler import QuoteAssembler
from src.config.logging import get_logger
from src.domain.exceptions.location_error import LocationUnresolvedError
from src.domain.value_objects.priced_quote import PricedQuote
from src.domain.value_objects.quote_request import QuoteRequest
from src.infrastructure.monitoring.metrics import record_quote_generated

logger = get_logger(__name__)


class GenerateQuoteUseCase:
    """Use case for pricing a land-clearing quote request."""

    def __init__(self, assembler: QuoteAssembler):
        self.assembler = assembler

    async def execute(self, request: QuoteRequest) -> PricedQuote:
        """Price a validated quote request."""
        logger.info(
            "Generating quote",
            service_type=request.service_type.value,
            acreage=str(request.acreage),
            location_kind=request.location.kind,
        )

        start_time = time.perf_counter()
        try:
            quote = await self.assembler.assemble(request)
        except LocationUnresolvedError as e:
            logger.warning(
                "Quote aborted, location unresolved",
                location=request.location.describe(),
                error=str(e),
            )
            raise

        record_quote_generated(
            request.service_type.value, time.perf_counter() - start_time
        )
        return quote
