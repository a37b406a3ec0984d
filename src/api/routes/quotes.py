"""Quote pricing endpoints."""

import structlog
from fastapi import APIRouter

from src.api.dependencies import GenerateQuoteUseCaseDep
from src.api.schemas.quote import QuoteRequestSchema, QuoteResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", response_model=QuoteResponse)
async def generate_quote(
    quote_data: QuoteRequestSchema,
    use_case: GenerateQuoteUseCaseDep,
):
    """Price a land-clearing job.

    Nothing is persisted; the quote id and validity window let the caller
    turn it into a proposal later.
    """
    quote = await use_case.execute(quote_data.to_domain())
    return QuoteResponse.model_validate(quote)
