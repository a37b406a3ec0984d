"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    PaymentProviderInterface,
    ProposalMailerInterface,
)
from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
    UsedTokenRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.proposal_calculator import ProposalCalculator
from src.config.settings import Settings
from src.domain.entities.proposal import Proposal
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.pricing_table import PricingTable
from src.domain.value_objects.proposal_details import ProposalInputs
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.database.models import Base
from src.infrastructure.security.jose_signer import JoseTokenSigner

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_TOKEN_SECRET = "test-approval-token-secret"
TEST_WEBHOOK_SECRET = "whsec_test_secret"
TEST_OPERATOR_KEY = "test-operator-key"


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=TEST_DATABASE_URL,
        REDIS_URL="redis://localhost:6379/1",
        PUBLIC_BASE_URL="https://proposals.test",
        OPERATOR_API_KEY=TEST_OPERATOR_KEY,
        APPROVAL_TOKEN_SECRET=TEST_TOKEN_SECRET,
        PAYMENT_WEBHOOK_SECRET=TEST_WEBHOOK_SECRET,
        LOCATION_PROVIDER="mock",
        PAYMENT_PROVIDER="mock",
        MAIL_PROVIDER="mock",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
    )


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def pricing_table():
    """Reference pricing table."""
    return PricingTable.reference()


@pytest.fixture
def proposal_calculator():
    """Proposal calculator with the default tax and deposit rates."""
    return ProposalCalculator()


@pytest.fixture
def token_signer():
    """Approval token signer with the test secret."""
    return JoseTokenSigner(TEST_TOKEN_SECRET)


@pytest.fixture
def sample_customer():
    """Sample customer for testing."""
    return Customer(
        name="Dana Whitfield",
        email="dana@example.com",
        phone="407-555-0142",
        address="1200 Cypress Hollow Rd, Sanford, FL",
    )


@pytest.fixture
def sample_inputs():
    """Sample frozen proposal inputs."""
    return ProposalInputs(
        acreage=Decimal("2.5"),
        package_id="standard",
        address="1200 Cypress Hollow Rd, Sanford, FL",
        selected_services=("forestry-mulching",),
        obstacles=("fence line",),
    )


@pytest.fixture
def sample_breakdown():
    """A single 5000.00 line item."""
    return [
        LineItem(
            service_id="forestry-mulching",
            service_name="Forestry Mulching",
            quantity=Decimal("2.5"),
            rate=Decimal("2000"),
        )
    ]


@pytest.fixture
def make_proposal(sample_customer, sample_inputs, sample_breakdown, proposal_calculator):
    """Build proposals in a given status."""

    def _make(
        status: ProposalStatus = ProposalStatus.DRAFT,
        valid_until: datetime = None,
        breakdown=None,
        calculator: ProposalCalculator = None,
    ) -> Proposal:
        items = breakdown or sample_breakdown
        totals = (calculator or proposal_calculator).calculate(items)
        proposal = Proposal.create(
            customer=sample_customer,
            inputs=sample_inputs,
            breakdown=items,
            totals=totals,
        )
        proposal.status = status
        if valid_until is not None:
            proposal.valid_until = valid_until
        return proposal

    return _make


@pytest.fixture
def draft_proposal(make_proposal):
    """Draft proposal totalling 5350.00."""
    return make_proposal()


@pytest.fixture
def sent_proposal(make_proposal):
    """Sent proposal totalling 5350.00."""
    return make_proposal(ProposalStatus.SENT)


@pytest.fixture
def lapsed_proposal(make_proposal):
    """Sent proposal whose validity ended yesterday."""
    return make_proposal(
        ProposalStatus.SENT,
        valid_until=datetime.now(timezone.utc) - timedelta(days=1),
    )


@pytest.fixture
def mock_proposal_repository():
    """Mock proposal repository."""
    mock_repo = AsyncMock(spec=ProposalRepositoryInterface)

    # Mock methods
    mock_repo.create = AsyncMock(side_effect=lambda proposal: proposal)
    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.update = AsyncMock(side_effect=lambda proposal, expected: proposal)
    mock_repo.find_expirable = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_event_repository():
    """Mock proposal event repository."""
    mock_repo = AsyncMock(spec=ProposalEventRepositoryInterface)

    # Mock methods
    mock_repo.record = AsyncMock(side_effect=lambda event: event)
    mock_repo.list_for_proposal = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_used_token_repository():
    """Mock consumed-token repository."""
    mock_repo = AsyncMock(spec=UsedTokenRepositoryInterface)

    # Mock methods
    mock_repo.exists = AsyncMock(return_value=False)
    mock_repo.add = AsyncMock(return_value=None)

    return mock_repo


@pytest.fixture
def mock_transaction_service():
    """Mock transaction service that runs the operation it is given."""
    mock_service = AsyncMock(spec=TransactionServiceInterface)

    async def _run(operation):
        return await operation()

    mock_service.execute_in_transaction = AsyncMock(side_effect=_run)

    return mock_service


@pytest.fixture
def mock_location_verifier():
    """Mock location verifier."""
    mock_verifier = AsyncMock(spec=LocationVerifierInterface)

    # Mock methods
    mock_verifier.name = "MockVerifier"
    mock_verifier.verify = AsyncMock()

    return mock_verifier


@pytest.fixture
def mock_payment_provider():
    """Mock payment provider."""
    mock_provider = AsyncMock(spec=PaymentProviderInterface)

    # Mock methods
    mock_provider.name = "MockPayments"
    mock_provider.create_deposit_session = AsyncMock()
    mock_provider.parse_webhook = MagicMock()

    return mock_provider


@pytest.fixture
def mock_mailer():
    """Mock proposal mailer."""
    mock_mailer = AsyncMock(spec=ProposalMailerInterface)

    # Mock methods
    mock_mailer.name = "MockMailer"
    mock_mailer.send_proposal = AsyncMock(return_value="email_123")

    return mock_mailer


@pytest.fixture
def client(test_settings):
    """Create test FastAPI client."""
    from fastapi.testclient import TestClient

    from src.api.app import create_app
    from src.api.dependencies import get_settings

    app = create_app()
    app.dependency_overrides[get_settings] = lambda: test_settings
    return TestClient(app)
