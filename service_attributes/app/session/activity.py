"""
Session activity sink.
"""

import sys
import os

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..results.models import SessionActivity


class SessionActivitySink:
    """Records client-reported session lifecycle events. Keeps no state."""

    def __init__(self, metrics: MetricsCollector):
        self.metrics = metrics
        self.logger = get_logger("attributes.session")

    def record(self, event: SessionActivity) -> None:
        self.metrics.increment_counter("session_events_total", type=event.value)
        self.logger.info("Session update received", type=event.value)
