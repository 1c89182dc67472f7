"""
Request Builder

Turns each logical SDK operation into one ``ApiRequest``: HTTP verb, path
from the endpoint table, validated parameters and whether the bearer token
may be attached. Nothing here touches the network or the session.

Operations with parameters validate them first; when validation fails the
error ``ValidationResult`` is returned instead of a request.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..engine.validators import validate
from ..schemas.bases import ValidationResult
from ..schemas.https import ApiRequest, AuthRequest, HttpMethod, TokenRequest
from .endpoints import build_endpoint_table


class BuyType(str, Enum):
    """Kinds of orders accepted by ``POST buy``."""

    OFFER = "offer"
    REVIEW = "review"
    INSTALL = "install"


OFFERS_RULES: Dict[str, str] = {
    "category_id": "optional",
    "product_id": "optional",
    "discount": "optional",
}

OFFER_RULES: Dict[str, str] = {"id": "required"}

ORDER_RULES: Dict[str, str] = {"order_number": "required"}

BUY_RULES: Dict[BuyType, Dict[str, str]] = {
    BuyType.OFFER: {
        "quantity": "required",
        "offer_id": "required",
        "callback_url": "optional",
        "sandbox": "optional",
    },
    BuyType.REVIEW: {
        "quantity": "required",
        "offer_id": "required",
        "url": "required",
        "reviews_array": "optional",
        "reviews": "optional",
        "file": "optional",
        "callback_url": "optional",
        "sandbox": "optional",
    },
    BuyType.INSTALL: {
        "quantity": "required",
        "offer_id": "required",
        "app_link": "required",
        "app_id": "required",
        "days": "required",
        "country": "required",
        "reviews": "optional",
        "file": "optional",
        "callback_url": "optional",
        "sandbox": "optional",
    },
}

BuildResult = Union[ApiRequest, ValidationResult]


class RequestBuilder:
    """
    Maps SDK operations to HTTP requests.

    Usage:
        ```python
        builder = RequestBuilder()
        request = builder.offers({"category_id": 3})
        # ApiRequest(method=GET, path="offers", params={"category_id": 3})
        ```
    """

    def __init__(self, endpoints: Optional[Mapping[str, str]] = None):
        """
        Args:
            endpoints: Optional path overrides for the default endpoint table.
        """
        self.endpoints = build_endpoint_table(endpoints)

    def _request(
        self,
        operation: str,
        method: HttpMethod,
        params: Optional[Dict[str, Any]] = None,
        use_auth_header: bool = True,
    ) -> ApiRequest:
        return ApiRequest(
            operation=operation,
            method=method,
            path=self.endpoints[operation],
            params=params or {},
            use_auth_header=use_auth_header,
        )

    def _validated(
        self,
        operation: str,
        method: HttpMethod,
        data: Optional[Mapping[str, Any]],
        rules: Mapping[str, str],
        use_auth_header: bool = True,
    ) -> BuildResult:
        result = validate(data, rules)
        if not result.is_valid:
            return result
        return self._request(operation, method, result.data, use_auth_header)

    # =========================================================================
    # Session operations
    # =========================================================================

    def auth(self, email: str, password: str) -> ApiRequest:
        body = AuthRequest(email=email, password=password)
        return self._request("auth", HttpMethod.POST, body.model_dump(), use_auth_header=False)

    def refresh(self, token: str) -> ApiRequest:
        body = TokenRequest(token=token)
        return self._request("refresh", HttpMethod.POST, body.model_dump(), use_auth_header=False)

    def invalidate(self, token: str) -> ApiRequest:
        body = TokenRequest(token=token)
        return self._request("invalidate", HttpMethod.POST, body.model_dump(), use_auth_header=False)

    def user(self) -> ApiRequest:
        return self._request("user", HttpMethod.GET)

    # =========================================================================
    # Catalog and orders
    # =========================================================================

    def offers(self, filters: Optional[Mapping[str, Any]] = None) -> BuildResult:
        return self._validated("offers", HttpMethod.GET, filters, OFFERS_RULES)

    def offer(self, offer_id: Any) -> BuildResult:
        # The offer lookup is public, the token is never sent.
        return self._validated("offer", HttpMethod.GET, {"id": offer_id}, OFFER_RULES, use_auth_header=False)

    def categories(self) -> ApiRequest:
        return self._request("categories", HttpMethod.GET)

    def orders(self) -> ApiRequest:
        return self._request("orders", HttpMethod.GET)

    def order(self, order_number: Any) -> BuildResult:
        return self._validated("order", HttpMethod.GET, {"order_number": order_number}, ORDER_RULES)

    def buy(self, order_type: Union[str, BuyType], data: Optional[Mapping[str, Any]]) -> Optional[BuildResult]:
        """
        Build a ``POST buy`` request for one of the order types.

        Args:
            order_type: "offer", "review" or "install".
            data: Order fields, see ``BUY_RULES`` for the accepted set.

        Returns:
            The request, the error ``ValidationResult``, or ``None`` when
            ``order_type`` is not a known order type.
        """
        try:
            buy_type = BuyType(order_type)
        except ValueError:
            return None
        return self._validated("buy", HttpMethod.POST, data, BUY_RULES[buy_type])
