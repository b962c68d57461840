"""
Mock relying party receiving authentication results from the provider.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.logging import get_logger, token_fingerprint
from service_attributes.app.errors import JWTError
from service_attributes.app.results.sealing import decrypt_and_verify_auth_result


class MockRelyingPartyServer:
    """Mock relying party implementation.

    Results arrive either on the browser redirect (``/done?result=...``) or
    as an out-of-band POST to ``/results``. Every received result is opened
    with the relying party's private key and the provider's public key and
    kept in memory for inspection.
    """

    def __init__(self, decryption_key: str, verification_key: str, port: int = 8030):
        self.port = port
        self.decryption_key = decryption_key
        self.verification_key = verification_key
        self.logger = get_logger("mock.relying_party")
        self.app = FastAPI(title="Mock Relying Party", version="1.0.0")

        self.received: List[Dict[str, Any]] = []

        self._setup_routes()

    def _setup_routes(self):
        """Set up mock relying party routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "mock-relying-party",
                "message": "Mock relying party for the attribute provider",
                "version": "1.0.0",
                "received": len(self.received)
            }

        @self.app.post("/results")
        async def receive_result(request: Request):
            """Out-of-band result callback."""
            content_type = request.headers.get("content-type", "")
            if not content_type.startswith("application/jwt"):
                raise HTTPException(status_code=415, detail="Expected application/jwt")

            token = (await request.body()).decode("ascii", errors="replace")
            return self._accept(token, channel="out_of_band")

        @self.app.get("/done")
        async def continuation(result: Optional[str] = Query(None)):
            """Continuation landing page for the browser."""
            if result is None:
                return {"message": "Authentication finished", "result": None}
            return self._accept(result, channel="inline")

        @self.app.get("/results")
        async def list_results():
            """List results received so far."""
            return {"results": self.received}

    def _accept(self, token: str, channel: str) -> Dict[str, Any]:
        try:
            result = decrypt_and_verify_auth_result(
                token,
                self.decryption_key,
                self.verification_key
            )
        except JWTError as e:
            self.logger.warning("Rejected result", channel=channel, error=e.message)
            raise HTTPException(status_code=400, detail="Invalid result token")

        entry = {"channel": channel, "result": result.model_dump(mode="json")}
        self.received.append(entry)
        self.logger.info(
            "Result received",
            channel=channel,
            status=result.status.value,
            token=token_fingerprint(token)
        )
        return entry


def create_app():
    """Create mock relying party application from environment keys."""
    with open(os.environ["RP_DECRYPTION_KEY_FILE"]) as f:
        decryption_key = f.read()
    with open(os.environ["RP_VERIFICATION_KEY_FILE"]) as f:
        verification_key = f.read()
    server = MockRelyingPartyServer(decryption_key, verification_key)
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8030)
