"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .accept_proposal import (
    AcceptProposalRequest,
    AcceptProposalResult,
    AcceptProposalUseCase,
)
from .cancel_proposal import CancelProposalUseCase
from .confirm_payment import ConfirmPaymentResult, ConfirmPaymentUseCase
from .create_proposal import (
    CreateProposalFromQuoteRequest,
    CreateProposalFromQuoteResult,
    CreateProposalFromQuoteUseCase,
    CreateProposalRequest,
    CreateProposalUseCase,
)
from .deposit_checkout import DepositCheckoutResult, DepositCheckoutUseCase
from .expire_proposals import (
    ExpireDueProposalsUseCase,
    ExpireProposalUseCase,
    ExpirySweepResult,
)
from .generate_quote import GenerateQuoteUseCase
from .get_proposal import GetProposalUseCase, ProposalWithHistory
from .send_proposal import SendProposalResult, SendProposalUseCase
from .view_proposal import ViewProposalResult, ViewProposalUseCase

__all__ = [
    "AcceptProposalRequest",
    "AcceptProposalResult",
    "AcceptProposalUseCase",
    "CancelProposalUseCase",
    "ConfirmPaymentResult",
    "ConfirmPaymentUseCase",
    "CreateProposalFromQuoteRequest",
    "CreateProposalFromQuoteResult",
    "CreateProposalFromQuoteUseCase",
    "CreateProposalRequest",
    "CreateProposalUseCase",
    "DepositCheckoutResult",
    "DepositCheckoutUseCase",
    "ExpireDueProposalsUseCase",
    "ExpireProposalUseCase",
    "ExpirySweepResult",
    "GenerateQuoteUseCase",
    "GetProposalUseCase",
    "ProposalWithHistory",
    "SendProposalResult",
    "SendProposalUseCase",
    "ViewProposalResult",
    "ViewProposalUseCase",
]
