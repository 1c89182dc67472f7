"""
Python SDK for the Accfarm reseller API.

Covers authentication, catalog browsing, order placement and verification
of signed order callbacks.
"""

from .clients import ResellerClient, RequestBuilder, HttpTransport, BuyType
from .config import ClientSettings
from .engine import JsonSettingsStore, SessionState, validate, SDKError, MalformedResponseError
from .schemas import Credentials, ValidationResult
from .servers import CallbackServer, sign_callback_data, verify_signature, verify_callback
from .utils import setup_logger

__version__ = "1.0.0"

__all__ = [
    "ResellerClient",
    "RequestBuilder",
    "HttpTransport",
    "BuyType",
    "ClientSettings",
    "JsonSettingsStore",
    "SessionState",
    "validate",
    "SDKError",
    "MalformedResponseError",
    "Credentials",
    "ValidationResult",
    "CallbackServer",
    "sign_callback_data",
    "verify_signature",
    "verify_callback",
    "setup_logger",
]
