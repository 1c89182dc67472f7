"""
Client module for the reseller API.

Provides the ``ResellerClient`` facade together with the request builder
and transport it is built from.
"""

from .builders import RequestBuilder, BuyType, BUY_RULES, OFFERS_RULES, OFFER_RULES, ORDER_RULES
from .endpoints import DEFAULT_ENDPOINTS, build_endpoint_table
from .http_client import ResellerClient
from .transport import HttpTransport

__all__ = [
    "ResellerClient",
    "RequestBuilder",
    "BuyType",
    "BUY_RULES",
    "OFFERS_RULES",
    "OFFER_RULES",
    "ORDER_RULES",
    "DEFAULT_ENDPOINTS",
    "build_endpoint_table",
    "HttpTransport",
]
