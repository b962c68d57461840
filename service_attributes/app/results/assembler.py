"""
Result assembly for the attribute provider.
"""

from typing import Optional, Sequence
import sys
import os

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from shared.logging import get_logger
from shared.tracing import trace_operation
from ..attributes.policy import AttributePolicy
from .models import AuthResult, AuthStatus
from .sealing import sign_and_encrypt_auth_result, DEFAULT_TTL_SECONDS

SESSION_UPDATE_PATH = "/session/update"


class ResultAssembler:
    """Builds authentication results and seals them into tokens."""

    def __init__(self, policy: AttributePolicy, algorithm: str = "RS256",
                 ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.policy = policy
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self.logger = get_logger("attributes.assembler")

    def assemble(self, requested_attributes: Sequence[str], with_session: bool,
                 server_base_url: str, status: AuthStatus = AuthStatus.SUCCESS) -> AuthResult:
        """Build the result for a completed authentication.

        Attribute resolution failures from the policy propagate unchanged.
        The status defaults to success; a status decided upstream is carried
        through as given.
        """
        with trace_operation("assemble_auth_result", attribute_count=len(requested_attributes)):
            attributes = self.policy.map(requested_attributes)

            session_url: Optional[str] = None
            if with_session:
                session_url = f"{server_base_url}{SESSION_UPDATE_PATH}"

            result = AuthResult(status=status, attributes=attributes, session_url=session_url)

        self.logger.debug(
            "Authentication result assembled",
            status=result.status.value,
            attributes=list(attributes),
            with_session=with_session
        )
        return result

    def seal(self, result: AuthResult, signing_key: str, encryption_key: str) -> str:
        """Sign and encrypt a result. Failures surface as JWTError."""
        with trace_operation("seal_auth_result", status=result.status.value):
            return sign_and_encrypt_auth_result(
                result,
                signing_key,
                encryption_key,
                algorithm=self.algorithm,
                ttl_seconds=self.ttl_seconds,
            )
