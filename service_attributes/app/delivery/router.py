"""
Delivery of sealed authentication results.

Inline mode appends the token to the continuation URL and redirects the
browser there. Out-of-band mode POSTs the token to the relying party's
callback URL in a background task and redirects the browser to the bare
continuation URL without waiting for the POST. A failed push is logged and
counted, never retried, and never changes the redirect.
"""

import asyncio
import time
from typing import Optional, Set

import httpx
from fastapi.responses import RedirectResponse
import sys
import os

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from shared.logging import get_logger, token_fingerprint
from shared.metrics import MetricsCollector
from ..results.models import DeliveryMode

JWT_CONTENT_TYPE = "application/jwt"
REDIRECT_STATUS_CODE = 303


def inline_url(continuation: str, token: str) -> str:
    """Attach ``token`` to the continuation URL as the ``result`` parameter."""
    separator = "&" if "?" in continuation else "?"
    return f"{continuation}{separator}result={token}"


class DeliveryRouter:
    """Routes sealed results to relying parties."""

    def __init__(self, metrics: MetricsCollector, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.metrics = metrics
        self.timeout = timeout
        self.transport = transport
        self.logger = get_logger("attributes.delivery")
        self._pending: Set[asyncio.Task] = set()

    def deliver_inline(self, continuation: str, token: str) -> RedirectResponse:
        """Redirect the browser to the continuation URL carrying the result."""
        target = inline_url(continuation, token)
        self.metrics.increment_counter("results_delivered_total", mode=DeliveryMode.INLINE.value)
        self.logger.info(
            "Redirecting user with auth result",
            continuation=continuation,
            token=token_fingerprint(token)
        )
        return RedirectResponse(target, status_code=REDIRECT_STATUS_CODE)

    def deliver_out_of_band(self, continuation: str, attr_url: str, token: str) -> RedirectResponse:
        """Push the result to ``attr_url`` and redirect to the bare continuation URL."""
        self._schedule_push(attr_url, token)
        self.metrics.increment_counter("results_delivered_total", mode=DeliveryMode.OUT_OF_BAND.value)
        self.logger.info("Redirecting user", continuation=continuation)
        return RedirectResponse(continuation, status_code=REDIRECT_STATUS_CODE)

    async def push(self, attr_url: str, token: str) -> bool:
        """POST a sealed result to a callback URL; report whether it was accepted."""
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    attr_url,
                    content=token,
                    headers={"Content-Type": JWT_CONTENT_TYPE}
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            self.metrics.increment_counter("oob_push_total", outcome="failed")
            self.logger.warning(
                "Failure reporting results",
                attr_url=attr_url,
                error=str(e),
                error_type=type(e).__name__
            )
            return False
        finally:
            self.metrics.get_metric("oob_push_duration_seconds").observe(time.time() - start_time)

        self.metrics.increment_counter("oob_push_total", outcome="delivered")
        self.logger.info(
            "Reported result",
            attr_url=attr_url,
            status_code=response.status_code,
            token=token_fingerprint(token)
        )
        return True

    def _schedule_push(self, attr_url: str, token: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.push(attr_url, token))
        # The loop only keeps weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._on_push_done)
        return task

    def _on_push_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            self.logger.warning("Result push cancelled")
            return
        error = task.exception()
        if error is not None:
            self.metrics.increment_counter("oob_push_total", outcome="error")
            self.logger.error(
                "Result push crashed",
                error=str(error),
                error_type=type(error).__name__,
                exc_info=error
            )

    @property
    def pending(self) -> int:
        """Number of pushes still in flight."""
        return len(self._pending)

    async def wait_for_pending(self) -> None:
        """Wait for in-flight pushes to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
