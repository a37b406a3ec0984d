#!/usr/bin/env python3
"""
Seed database with a demo proposal for development.
"""

import asyncio
import os
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.application.services.proposal_calculator import ProposalCalculator
from src.application.services.quote_assembler import QuoteAssembler
from src.application.use_cases.create_proposal import (
    CreateProposalFromQuoteRequest,
    CreateProposalFromQuoteUseCase,
    CreateProposalUseCase,
)
from src.config.logging import configure_logging, get_logger
from src.config.settings import settings
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.location import LocationReference
from src.domain.value_objects.pricing_table import PricingTable
from src.domain.value_objects.quote_request import QuoteRequest
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import VegetationDensity
from src.infrastructure.database.repositories.proposal_event_repository import (
    ProposalEventRepository,
)
from src.infrastructure.database.repositories.proposal_repository import (
    ProposalRepository,
)
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from src.infrastructure.providers.factory import ProviderFactory

configure_logging()
logger = get_logger(__name__)


def get_seed_database_url():
    """Get database URL for seeding."""
    # Allow override for Docker environment
    return os.getenv("MIGRATION_DATABASE_URL") or str(settings.DATABASE_URL)


async def seed_database():
    """Seed database with a demo draft proposal."""
    database_url = get_seed_database_url()
    logger.info("Connecting to database", database_url=database_url.split("@")[-1])

    engine = create_async_engine(database_url)
    async_session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    try:
        async with async_session_factory() as session:
            existing = await session.execute(text("SELECT COUNT(*) FROM proposals"))
            if existing.scalar() > 0:
                logger.info("Database already has data, skipping seed")
                return

            factory = ProviderFactory()
            assembler = QuoteAssembler(
                pricing_table=PricingTable.reference(settings.TRANSPORT_HOURLY_RATE),
                location_verifier=factory.create_location_verifier("mock"),
            )
            create_proposal = CreateProposalUseCase(
                proposal_repo=ProposalRepository(session),
                event_repo=ProposalEventRepository(session),
                calculator=ProposalCalculator(settings.TAX_RATE, settings.DEPOSIT_RATE),
                transaction_service=TransactionService(session),
            )
            use_case = CreateProposalFromQuoteUseCase(assembler, create_proposal)

            result = await use_case.execute(
                CreateProposalFromQuoteRequest(
                    customer=Customer(
                        name="Dana Whitfield",
                        email="dana@example.com",
                        phone="407-555-0142",
                        address="1200 Cypress Hollow Rd, Kissimmee, FL",
                    ),
                    quote_request=QuoteRequest(
                        location=LocationReference(
                            address="1200 Cypress Hollow Rd, Kissimmee, FL"
                        ),
                        service_type=ServiceType.FORESTRY_MULCHING,
                        acreage=Decimal("2.5"),
                        density=VegetationDensity.MODERATE,
                    ),
                    obstacles=("fence line", "septic field"),
                    notes="Seeded demo proposal",
                    created_by="seed",
                )
            )

            logger.info(
                "Seeded demo proposal",
                proposal_id=str(result.proposal.id),
                total=str(result.proposal.totals.total),
            )
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_database())
