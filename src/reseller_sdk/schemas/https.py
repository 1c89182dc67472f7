"""
HTTP Request Schema Models for the Reseller API

This module defines the Pydantic models used to describe outgoing HTTP calls.
A logical SDK operation is first turned into an ``ApiRequest`` by the request
builder, then executed by the transport.

The request flow consists of:
1. Operation parameters are validated (``engine.validators``)
2. ``RequestBuilder`` maps the operation to an ``ApiRequest``
3. ``HttpTransport`` sends it, adding headers from ``ClientRequestHeader``
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .bases import SDKModel


class HttpMethod(str, Enum):
    """HTTP verbs used by the reseller API."""

    GET = "GET"
    POST = "POST"


# ============================================================================
# Request Headers
# ============================================================================

class ClientRequestHeader(BaseModel):
    """HTTP request headers sent by client.

    Attributes:
        content_type: MIME type of request body (default: application/json).
            Left unset for multipart uploads so httpx can add the boundary.
        authorization: Optional bearer token for authenticated requests.
    """
    model_config = ConfigDict(populate_by_name=True)
    content_type: Optional[str] = Field(default="application/json", alias="Content-Type")
    authorization: Optional[str] = Field(default=None, alias="Authorization")


# ============================================================================
# Request Bodies
# ============================================================================

class AuthRequest(SDKModel):
    """Body of ``POST user/login``.

    Attributes:
        email: Reseller account email.
        password: Reseller account password.
    """
    email: str = Field(..., description="Reseller account email")
    password: str = Field(..., description="Reseller account password")


class TokenRequest(SDKModel):
    """Body of ``POST user/refresh`` and ``POST user/invalidate``.

    Attributes:
        token: The bearer token currently held by the session.
    """
    token: str = Field(..., description="Current bearer token")


# ============================================================================
# Built Request
# ============================================================================

class ApiRequest(SDKModel):
    """One HTTP call derived from a logical SDK operation.

    Attributes:
        operation: Logical operation name (e.g. "offers", "buy").
        method: HTTP verb.
        path: Path relative to the API base URL (e.g. "user/login").
        params: Query parameters for GET, body fields for POST.
        use_auth_header: Whether the bearer token may be attached.
    """
    operation: str = Field(..., description="Logical operation name")
    method: HttpMethod = Field(..., description="HTTP verb")
    path: str = Field(..., description="Path relative to the API base URL")
    params: Dict[str, Any] = Field(default_factory=dict, description="Query or body parameters")
    use_auth_header: bool = Field(default=True, description="Attach bearer token when held")
