"""
HMAC token signer backed by python-jose.
"""

from typing import Any, Dict

from jose import ExpiredSignatureError, JWTError, jwt

from src.application.interfaces.services import TokenSignerInterface
from src.config.logging import get_logger
from src.domain.exceptions.provider_error import ProviderConfigurationError
from src.domain.exceptions.token_error import TokenExpiredError, TokenInvalidError

logger = get_logger(__name__)


class JoseTokenSigner(TokenSignerInterface):
    """Signs compact JWS tokens with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ProviderConfigurationError("APPROVAL_TOKEN_SECRET is required")
        self.secret = secret
        self.algorithm = algorithm

    def sign(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiry and return the claims."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.info("Approval token expired")
            raise TokenExpiredError()
        except JWTError as e:
            logger.warning("Approval token rejected", reason=str(e))
            raise TokenInvalidError(str(e))
