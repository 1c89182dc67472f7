from .bases import SDKModel, Credentials, ValidationResult, json_adapter
from .https import HttpMethod, ClientRequestHeader, AuthRequest, TokenRequest, ApiRequest

__all__ = [
    "SDKModel",
    "Credentials",
    "ValidationResult",
    "json_adapter",
    "HttpMethod",
    "ClientRequestHeader",
    "AuthRequest",
    "TokenRequest",
    "ApiRequest",
]
