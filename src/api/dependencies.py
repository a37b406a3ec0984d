"""
FastAPI dependency injection container.
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    PaymentProviderInterface,
    ProposalMailerInterface,
)
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.application.services.proposal_calculator import ProposalCalculator
from src.application.services.quote_assembler import QuoteAssembler
from src.application.use_cases.accept_proposal import AcceptProposalUseCase
from src.application.use_cases.cancel_proposal import CancelProposalUseCase
from src.application.use_cases.confirm_payment import ConfirmPaymentUseCase
from src.application.use_cases.create_proposal import (
    CreateProposalFromQuoteUseCase,
    CreateProposalUseCase,
)
from src.application.use_cases.deposit_checkout import DepositCheckoutUseCase
from src.application.use_cases.expire_proposals import (
    ExpireDueProposalsUseCase,
    ExpireProposalUseCase,
)
from src.application.use_cases.generate_quote import GenerateQuoteUseCase
from src.application.use_cases.get_proposal import GetProposalUseCase
from src.application.use_cases.send_proposal import SendProposalUseCase
from src.application.use_cases.view_proposal import ViewProposalUseCase
from src.config.database import get_db_session
from src.config.logging import get_logger
from src.config.settings import Settings, settings
from src.domain.value_objects.pricing_table import PricingTable
from src.infrastructure.database.repositories.proposal_event_repository import (
    ProposalEventRepository,
)
from src.infrastructure.database.repositories.proposal_repository import (
    ProposalRepository,
)
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from src.infrastructure.database.repositories.used_token_repository import (
    UsedTokenRepository,
)
from src.infrastructure.providers.factory import ProviderFactory
from src.infrastructure.security.jose_signer import JoseTokenSigner

logger = get_logger(__name__)


# Configuration
def get_settings() -> Settings:
    """Get application settings."""
    return settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


# Database Dependencies
async def get_proposal_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ProposalRepository:
    """Get proposal repository instance."""
    return ProposalRepository(db)


async def get_proposal_event_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ProposalEventRepository:
    """Get proposal event repository instance."""
    return ProposalEventRepository(db)


async def get_used_token_repository(
    db: AsyncSession = Depends(get_db_session),
) -> UsedTokenRepository:
    """Get used approval token repository instance."""
    return UsedTokenRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


ProposalRepositoryDep = Annotated[ProposalRepository, Depends(get_proposal_repository)]
ProposalEventRepositoryDep = Annotated[
    ProposalEventRepository, Depends(get_proposal_event_repository)
]
UsedTokenRepositoryDep = Annotated[UsedTokenRepository, Depends(get_used_token_repository)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]


# Provider Dependencies
def get_provider_factory(config: SettingsDep) -> ProviderFactory:
    """Get provider factory instance."""
    return ProviderFactory(config)


ProviderFactoryDep = Annotated[ProviderFactory, Depends(get_provider_factory)]


def get_location_verifier(factory: ProviderFactoryDep) -> LocationVerifierInterface:
    """Get the configured location verifier."""
    return factory.create_location_verifier()


def get_payment_provider(factory: ProviderFactoryDep) -> PaymentProviderInterface:
    """Get the configured payment provider."""
    return factory.create_payment_provider()


def get_mailer(factory: ProviderFactoryDep) -> ProposalMailerInterface:
    """Get the configured proposal mailer."""
    return factory.create_mailer()


LocationVerifierDep = Annotated[LocationVerifierInterface, Depends(get_location_verifier)]
PaymentProviderDep = Annotated[PaymentProviderInterface, Depends(get_payment_provider)]
MailerDep = Annotated[ProposalMailerInterface, Depends(get_mailer)]


# Service Dependencies
def get_pricing_table(config: SettingsDep) -> PricingTable:
    """Get the pricing table quotes are computed against."""
    return PricingTable.reference(config.TRANSPORT_HOURLY_RATE)


def get_token_signer(config: SettingsDep) -> JoseTokenSigner:
    """Get approval token signer instance."""
    return JoseTokenSigner(config.APPROVAL_TOKEN_SECRET, config.APPROVAL_TOKEN_ALGORITHM)


def get_token_manager(
    config: SettingsDep,
    used_tokens: UsedTokenRepositoryDep,
    signer: JoseTokenSigner = Depends(get_token_signer),
) -> ApprovalTokenManager:
    """Get approval token manager instance."""
    return ApprovalTokenManager(
        signer=signer,
        used_tokens=used_tokens,
        ttl_days=config.APPROVAL_TOKEN_TTL_DAYS,
    )


def get_quote_assembler(
    config: SettingsDep,
    location_verifier: LocationVerifierDep,
    pricing_table: PricingTable = Depends(get_pricing_table),
) -> QuoteAssembler:
    """Get quote assembler instance."""
    return QuoteAssembler(
        pricing_table=pricing_table,
        location_verifier=location_verifier,
        default_confidence=config.DEFAULT_PRICING_CONFIDENCE,
        validity_days=config.QUOTE_VALIDITY_DAYS,
    )


def get_proposal_calculator(config: SettingsDep) -> ProposalCalculator:
    """Get proposal calculator instance."""
    return ProposalCalculator(tax_rate=config.TAX_RATE, deposit_rate=config.DEPOSIT_RATE)


TokenManagerDep = Annotated[ApprovalTokenManager, Depends(get_token_manager)]
QuoteAssemblerDep = Annotated[QuoteAssembler, Depends(get_quote_assembler)]
ProposalCalculatorDep = Annotated[ProposalCalculator, Depends(get_proposal_calculator)]


# Use Case Dependencies
def get_generate_quote_use_case(assembler: QuoteAssemblerDep) -> GenerateQuoteUseCase:
    """Get generate quote use case."""
    return GenerateQuoteUseCase(assembler)


def get_create_proposal_use_case(
    config: SettingsDep,
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    calculator: ProposalCalculatorDep,
    transaction_service: TransactionServiceDep,
) -> CreateProposalUseCase:
    """Get create proposal use case."""
    return CreateProposalUseCase(
        proposal_repo=proposal_repo,
        event_repo=event_repo,
        calculator=calculator,
        transaction_service=transaction_service,
        validity_days=config.QUOTE_VALIDITY_DAYS,
    )


CreateProposalUseCaseDep = Annotated[
    CreateProposalUseCase, Depends(get_create_proposal_use_case)
]


def get_create_proposal_from_quote_use_case(
    assembler: QuoteAssemblerDep,
    create_proposal: CreateProposalUseCaseDep,
) -> CreateProposalFromQuoteUseCase:
    """Get create proposal from quote use case."""
    return CreateProposalFromQuoteUseCase(assembler, create_proposal)


def get_send_proposal_use_case(
    config: SettingsDep,
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    token_manager: TokenManagerDep,
    mailer: MailerDep,
    transaction_service: TransactionServiceDep,
) -> SendProposalUseCase:
    """Get send proposal use case."""
    return SendProposalUseCase(
        proposal_repo=proposal_repo,
        event_repo=event_repo,
        token_manager=token_manager,
        mailer=mailer,
        transaction_service=transaction_service,
        public_base_url=config.PUBLIC_BASE_URL,
    )


def get_view_proposal_use_case(
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    token_manager: TokenManagerDep,
    transaction_service: TransactionServiceDep,
) -> ViewProposalUseCase:
    """Get view proposal use case."""
    return ViewProposalUseCase(proposal_repo, event_repo, token_manager, transaction_service)


def get_accept_proposal_use_case(
    config: SettingsDep,
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    token_manager: TokenManagerDep,
    payment_provider: PaymentProviderDep,
    transaction_service: TransactionServiceDep,
) -> AcceptProposalUseCase:
    """Get accept proposal use case."""
    return AcceptProposalUseCase(
        proposal_repo=proposal_repo,
        event_repo=event_repo,
        token_manager=token_manager,
        payment_provider=payment_provider,
        transaction_service=transaction_service,
        public_base_url=config.PUBLIC_BASE_URL,
        currency=config.PAYMENT_CURRENCY,
    )


def get_deposit_checkout_use_case(
    config: SettingsDep,
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    token_manager: TokenManagerDep,
    payment_provider: PaymentProviderDep,
    transaction_service: TransactionServiceDep,
) -> DepositCheckoutUseCase:
    """Get deposit checkout use case."""
    return DepositCheckoutUseCase(
        proposal_repo=proposal_repo,
        event_repo=event_repo,
        token_manager=token_manager,
        payment_provider=payment_provider,
        transaction_service=transaction_service,
        public_base_url=config.PUBLIC_BASE_URL,
        currency=config.PAYMENT_CURRENCY,
    )


def get_confirm_payment_use_case(
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    payment_provider: PaymentProviderDep,
    transaction_service: TransactionServiceDep,
) -> ConfirmPaymentUseCase:
    """Get confirm payment use case."""
    return ConfirmPaymentUseCase(
        proposal_repo, event_repo, payment_provider, transaction_service
    )


def get_expire_proposal_use_case(
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> ExpireProposalUseCase:
    """Get expire proposal use case."""
    return ExpireProposalUseCase(proposal_repo, event_repo, transaction_service)


def get_expire_due_proposals_use_case(
    config: SettingsDep,
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> ExpireDueProposalsUseCase:
    """Get expiry sweep use case."""
    return ExpireDueProposalsUseCase(
        proposal_repo,
        event_repo,
        transaction_service,
        batch_size=config.EXPIRY_SWEEP_BATCH_SIZE,
    )


def get_cancel_proposal_use_case(
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> CancelProposalUseCase:
    """Get cancel proposal use case."""
    return CancelProposalUseCase(proposal_repo, event_repo, transaction_service)


def get_get_proposal_use_case(
    proposal_repo: ProposalRepositoryDep,
    event_repo: ProposalEventRepositoryDep,
) -> GetProposalUseCase:
    """Get proposal read use case."""
    return GetProposalUseCase(proposal_repo, event_repo)


# Operator access
async def require_operator(
    config: SettingsDep,
    x_api_key: Annotated[Optional[str], Header()] = None,
) -> str:
    """Require the operator API key on back-office routes."""
    if not config.OPERATOR_API_KEY:
        # Open in local development only
        if config.ENVIRONMENT in ("development", "test"):
            return "operator"
        logger.error("OPERATOR_API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Operator access is not configured",
        )

    if not x_api_key or not secrets.compare_digest(x_api_key, config.OPERATOR_API_KEY):
        logger.warning("Rejected operator request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return "operator"


# Type aliases for cleaner dependency injection
GenerateQuoteUseCaseDep = Annotated[GenerateQuoteUseCase, Depends(get_generate_quote_use_case)]
CreateProposalFromQuoteUseCaseDep = Annotated[
    CreateProposalFromQuoteUseCase, Depends(get_create_proposal_from_quote_use_case)
]
SendProposalUseCaseDep = Annotated[SendProposalUseCase, Depends(get_send_proposal_use_case)]
ViewProposalUseCaseDep = Annotated[ViewProposalUseCase, Depends(get_view_proposal_use_case)]
AcceptProposalUseCaseDep = Annotated[
    AcceptProposalUseCase, Depends(get_accept_proposal_use_case)
]
DepositCheckoutUseCaseDep = Annotated[
    DepositCheckoutUseCase, Depends(get_deposit_checkout_use_case)
]
ConfirmPaymentUseCaseDep = Annotated[
    ConfirmPaymentUseCase, Depends(get_confirm_payment_use_case)
]
ExpireProposalUseCaseDep = Annotated[
    ExpireProposalUseCase, Depends(get_expire_proposal_use_case)
]
ExpireDueProposalsUseCaseDep = Annotated[
    ExpireDueProposalsUseCase, Depends(get_expire_due_proposals_use_case)
]
CancelProposalUseCaseDep = Annotated[
    CancelProposalUseCase, Depends(get_cancel_proposal_use_case)
]
GetProposalUseCaseDep = Annotated[GetProposalUseCase, Depends(get_get_proposal_use_case)]
OperatorDep = Annotated[str, Depends(require_operator)]
