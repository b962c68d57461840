"""
Attribute provider service.
"""

import asyncio
import sys
import os
from typing import Optional

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

import httpx
from fastapi import Query, Response
from shared.base_service import BaseService
from shared.observability import get_observability_manager

from . import codec
from .attributes.policy import AttributePolicy
from .config import ProviderSettings, get_provider_settings
from .delivery.router import DeliveryRouter
from .results.assembler import ResultAssembler
from .results.models import SessionActivity, StartAuthRequest, StartAuthResponse
from .session.activity import SessionActivitySink


class AttributesService(BaseService):
    """Out-of-band attribute provider."""

    def __init__(self, settings: Optional[ProviderSettings] = None,
                 push_transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__("attributes", 8020)
        self.settings = settings or get_provider_settings()
        self.settings.validate_settings()

        self.observability = get_observability_manager("attributes", self.metrics)

        self.signing_key = self.settings.get_signing_key()
        self.encryption_key = self.settings.get_encryption_key()
        self.policy = AttributePolicy(self.settings.attributes)
        self.assembler = ResultAssembler(
            self.policy,
            algorithm=self.settings.signing_algorithm,
            ttl_seconds=self.settings.result_ttl_seconds
        )
        self.delivery = DeliveryRouter(
            self.metrics,
            timeout=self.settings.push_timeout_seconds,
            transport=push_transport
        )
        self.session_sink = SessionActivitySink(self.metrics)

        self._setup_attributes_routes()

    def _setup_attributes_routes(self):
        """Set up provider routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "attributes",
                "message": "Out-of-Band Attribute Provider - Attributes Service",
                "version": "1.0.0",
                "server_url": self.settings.server_url,
                "with_session": self.settings.with_session,
                "attributes": self.policy.supported
            }

        @self.app.post("/start_authentication", response_model=StartAuthResponse)
        async def start_authentication(request: StartAuthRequest):
            """Build the browser URL for a new authentication."""
            return self.start_authentication(request)

        @self.app.get("/browser/{attributes}/{continuation}")
        async def user_inline(attributes: str, continuation: str):
            """Complete an authentication and deliver the result on the redirect."""
            requested = codec.decode_attribute_list(attributes)
            continuation_url = codec.decode_utf8(continuation)
            token = await asyncio.to_thread(self._complete_authentication, requested)
            self.observability.log_business_event(
                "result_delivered_inline",
                attributes=requested
            )
            return self.delivery.deliver_inline(continuation_url, token)

        @self.app.get("/browser/{attributes}/{continuation}/{attr_url}")
        async def user_oob(attributes: str, continuation: str, attr_url: str):
            """Complete an authentication and push the result to the callback URL."""
            requested = codec.decode_attribute_list(attributes)
            continuation_url = codec.decode_utf8(continuation)
            callback_url = codec.decode_utf8(attr_url)
            token = await asyncio.to_thread(self._complete_authentication, requested)
            self.observability.log_business_event(
                "result_pushed",
                attributes=requested,
                attr_url=callback_url
            )
            return self.delivery.deliver_out_of_band(continuation_url, callback_url, token)

        @self.app.post("/session/update", status_code=204)
        async def session_update(event: SessionActivity = Query(..., alias="type", description="Session activity")):
            """Record a session lifecycle signal."""
            self.session_sink.record(event)
            return Response(status_code=204)

    def start_authentication(self, request: StartAuthRequest) -> StartAuthResponse:
        """Validate the request and encode it into the URL the browser will visit."""
        self.policy.verify(request.attributes)

        segments = [
            codec.encode_json(request.attributes),
            codec.encode(request.continuation),
        ]
        if request.attr_url is not None:
            segments.append(codec.encode(request.attr_url))

        client_url = f"{self.settings.server_url}/browser/{'/'.join(segments)}"
        self.observability.log_business_event(
            "authentication_started",
            attributes=request.attributes,
            out_of_band=request.attr_url is not None
        )
        return StartAuthResponse(client_url=client_url)

    def _complete_authentication(self, requested) -> str:
        """Assemble and seal a result. Called in a worker thread; RSA work blocks."""
        result = self.assembler.assemble(
            requested,
            self.settings.with_session,
            self.settings.server_url
        )
        token = self.assembler.seal(result, self.signing_key, self.encryption_key)
        self.metrics.increment_counter("results_sealed_total", status=result.status.value)
        return token

    async def _on_shutdown(self):
        """Let in-flight result pushes finish before stopping."""
        if self.delivery.pending:
            self.logger.info("Waiting for result pushes", pending=self.delivery.pending)
        await self.delivery.wait_for_pending()
        await super()._on_shutdown()

    async def _check_dependencies(self):
        """Report attribute policy state."""
        return {
            "attribute_policy": "ok" if self.policy.supported else "empty"
        }


def create_app():
    """Create FastAPI application."""
    service = AttributesService()
    return service.app


if __name__ == "__main__":
    service = AttributesService()
    service.run()
