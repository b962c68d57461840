"""
Data models for authentication results and the provider API.
"""

from typing import Dict, List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AuthStatus(str, Enum):
    """Outcome of one authentication attempt."""
    SUCCESS = "success"
    FAILED = "failed"


class SessionActivity(str, Enum):
    """Session lifecycle signals reported by clients."""
    USER_ACTIVE = "user_active"
    CONTINUE = "continue"
    ABORT = "abort"
    TIMEOUT = "timeout"
    SESSION_ENDED = "session_ended"


class DeliveryMode(str, Enum):
    """How a sealed result reaches the relying party."""
    INLINE = "inline"
    OUT_OF_BAND = "out_of_band"


class AuthResult(BaseModel):
    """Result of one authentication attempt, immutable once built."""

    model_config = ConfigDict(frozen=True)

    status: AuthStatus = Field(..., description="Authentication outcome")
    attributes: Optional[Dict[str, str]] = Field(None, description="Resolved attribute values")
    session_url: Optional[str] = Field(None, description="Endpoint for session activity updates")


class StartAuthRequest(BaseModel):
    """Request model for starting an authentication."""
    attributes: List[str] = Field(..., description="Attributes requested by the relying party")
    continuation: str = Field(..., min_length=1, description="URL the browser returns to afterwards")
    attr_url: Optional[str] = Field(None, min_length=1, description="Callback URL for out-of-band delivery")


class StartAuthResponse(BaseModel):
    """Response model for starting an authentication."""
    client_url: str = Field(..., description="URL the user's browser should visit")
