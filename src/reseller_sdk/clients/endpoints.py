"""
Endpoint table of the reseller API.

Maps every logical operation to its path below the API base URL.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from ..engine.exceptions import UnknownEndpointError


DEFAULT_ENDPOINTS: Mapping[str, str] = MappingProxyType({
    "auth": "user/login",
    "user": "user",
    "invalidate": "user/invalidate",
    "refresh": "user/refresh",
    "offers": "offers",
    "offer": "offer",
    "categories": "categories",
    "orders": "orders",
    "order": "order",
    "buy": "buy",
})


def build_endpoint_table(overrides: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """
    Build a read-only endpoint table.

    Args:
        overrides: Paths replacing the defaults for some operations
            (e.g. the ``endpoints`` entry of a settings file).

    Returns:
        Immutable operation -> path mapping.

    Raises:
        UnknownEndpointError: If ``overrides`` names an unknown operation.
    """
    table = dict(DEFAULT_ENDPOINTS)
    for operation, path in (overrides or {}).items():
        if operation not in DEFAULT_ENDPOINTS:
            raise UnknownEndpointError(f"Unknown API operation: {operation}")
        table[operation] = str(path).strip("/")
    return MappingProxyType(table)
