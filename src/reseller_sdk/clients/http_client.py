"""
Reseller API Client

The public entry point of the SDK. ``ResellerClient`` wraps every endpoint of
the reseller API behind one method, keeps the session credentials, and turns
every expected failure into a value:

    - invalid parameters      -> ``ValidationResult`` carrying ``errors``
    - failed or empty call    -> ``{}`` (``None``/``False`` for session calls)
    - missing bearer token    -> short-circuit before any network call
    - unknown order type      -> ``None``

Only a malformed JSON body raises (``MalformedResponseError``).
"""

from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import JsonValue

from ..config import ClientSettings
from ..engine.session import SessionState, SettingsStore
from ..schemas.bases import Credentials, ValidationResult
from ..schemas.https import ApiRequest
from ..utils import logger
from .builders import BuildResult, BuyType, RequestBuilder
from .transport import HttpTransport


TOKEN_INVALIDATED_MESSAGE = "Token invalidated"

OperationResult = Union[JsonValue, ValidationResult]


class ResellerClient:
    """
    Synchronous client for the reseller API.

    One instance holds one session (bearer token + user secret). The session
    is not guarded internally; share an instance between threads only while
    holding ``client.session.lock``.

    Usage:
        ```python
        client = ResellerClient()
        if client.auth("reseller@email.com", "password"):
            offers = client.offers({"category_id": 3})
            order = client.buy("offer", {"quantity": 20, "offer_id": 142, "sandbox": 1})
        ```
    """

    def __init__(
        self,
        bearer_token: str = "",
        user_secret: str = "",
        settings: Optional[ClientSettings] = None,
        endpoints: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize client with optional credentials.

        Args:
            bearer_token: Initial bearer token (falls back to settings).
            user_secret: Initial user secret (falls back to settings).
            settings: Connection settings (default: ``ClientSettings()``).
            endpoints: Optional path overrides for the endpoint table.
            transport: Optional httpx transport, mainly for tests.
        """
        self.settings = settings or ClientSettings()
        self.session = SessionState(
            token=bearer_token or self.settings.bearer_token,
            secret=user_secret or self.settings.user_secret,
        )
        self.builder = RequestBuilder(endpoints)
        self.transport = HttpTransport(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            transport=transport,
        )
        self._store: Optional[SettingsStore] = None

    @classmethod
    def from_store(
        cls,
        store: SettingsStore,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "ResellerClient":
        """
        Restore a client from persisted settings.

        Args:
            store: Settings store holding ``bearerToken``, ``userSecret`` and
                optionally ``endpoints``.
            settings: Connection settings.
            transport: Optional httpx transport.
        """
        stored = store.load()
        credentials = Credentials.model_validate(
            {k: v for k, v in stored.items() if k in ("bearerToken", "userSecret") and v is not None}
        )
        client = cls(
            bearer_token=credentials.bearer_token,
            user_secret=credentials.user_secret,
            settings=settings,
            endpoints=stored.get("endpoints") or None,
            transport=transport,
        )
        client._store = store
        return client

    def persist(self, store: Optional[SettingsStore] = None) -> None:
        """
        Save the current credentials and endpoint table.

        Args:
            store: Target store, defaults to the one passed to ``from_store``.
        """
        store = store or self._store
        if store is None:
            raise ValueError("No settings store to persist to")
        values = self.session.credentials().to_dict(by_alias=True)
        values["endpoints"] = dict(self.builder.endpoints)
        store.save(values)

    # =========================================================================
    # Credentials accessors
    # =========================================================================

    def get_token(self) -> str:
        return self.session.token

    def get_secret(self) -> str:
        return self.session.secret

    def set_token(self, token: str) -> "ResellerClient":
        self.session.set_token(token)
        return self

    def set_secret(self, secret: str) -> "ResellerClient":
        self.session.set_secret(secret)
        return self

    # =========================================================================
    # Session operations
    # =========================================================================

    def auth(self, email: str, password: str) -> Optional[Credentials]:
        """
        Log in and store the returned bearer token and user secret.

        Returns:
            The new credentials, or ``None`` when the login failed. The
            session is left untouched on failure.
        """
        response = self._send(self.builder.auth(email, password))
        if not isinstance(response, dict) or not response.get("token") or not response.get("user"):
            logger.warning("Authentication failed")
            return None

        user = response["user"]
        secret = user.get("secret") if isinstance(user, dict) else None
        credentials = Credentials(bearer_token=str(response["token"]), user_secret=str(secret or ""))
        self.session.update(credentials)
        logger.info("Authenticated")
        return credentials

    def refresh(self) -> Optional[str]:
        """
        Exchange the current bearer token for a fresh one.

        Returns:
            The new token, or ``None`` when no token is held or the refresh
            was refused.
        """
        if not self.session.is_authenticated:
            logger.warning("Refresh skipped: no bearer token held")
            return None

        response = self._send(self.builder.refresh(self.session.token))
        if not isinstance(response, dict) or response.get("error") or not response.get("token"):
            return None

        self.session.set_token(str(response["token"]))
        return self.session.token

    def invalidate(self) -> bool:
        """
        Invalidate the current bearer token on the server.

        The token is dropped locally only when the server confirms it.
        """
        if not self.session.is_authenticated:
            logger.warning("Invalidate skipped: no bearer token held")
            return False

        response = self._send(self.builder.invalidate(self.session.token))
        if (
            isinstance(response, dict)
            and not response.get("error")
            and response.get("msg") == TOKEN_INVALIDATED_MESSAGE
        ):
            self.session.clear_token()
            return True
        return False

    def user(self) -> JsonValue:
        """
        Fetch the authenticated user's profile.

        The session secret is overwritten with the profile's ``secret``
        field, an empty string when the field is missing.
        """
        if not self.session.is_authenticated:
            logger.warning("User profile skipped: no bearer token held")
            return {}

        profile = self._send(self.builder.user()) or {}
        secret = profile.get("secret") if isinstance(profile, dict) else None
        self.session.set_secret(str(secret) if secret is not None else "")
        return profile

    # =========================================================================
    # Catalog and orders
    # =========================================================================

    def offers(self, filters: Optional[Mapping[str, Any]] = None) -> OperationResult:
        """
        List offers, optionally filtered.

        Args:
            filters: ``category_id``, ``product_id`` and ``discount``
                (``1`` for discounted offers only). Other keys are dropped.
        """
        return self._execute(self.builder.offers(filters))

    def offer(self, offer_id: int) -> OperationResult:
        return self._execute(self.builder.offer(offer_id))

    def categories(self) -> JsonValue:
        return self._execute(self.builder.categories())

    def orders(self) -> JsonValue:
        return self._execute(self.builder.orders())

    def order(self, order_number: str) -> OperationResult:
        return self._execute(self.builder.order(order_number))

    def buy(self, order_type: Union[str, BuyType], data: Optional[Mapping[str, Any]] = None) -> Optional[OperationResult]:
        """
        Place an order.

        Types and their fields:
            offer:   quantity, offer_id; optional callback_url, sandbox
            review:  quantity, offer_id, url; optional reviews_array,
                     reviews, file, callback_url, sandbox
            install: quantity, offer_id, app_link, app_id, days, country;
                     optional reviews, file, callback_url, sandbox

        ``file`` is a path on disk; when set the order is sent as a multipart
        upload. Without ``reviews``/``reviews_array``/``file`` the reviews are
        generated by the vendor. ``sandbox=1`` places an unbilled test order.

        Returns:
            The API response (``{}`` on failure), the error
            ``ValidationResult`` when required fields are missing, or
            ``None`` for an unknown order type.
        """
        built = self.builder.buy(order_type, data)
        if built is None:
            logger.warning(f"Unknown order type: {order_type!r}")
            return None
        return self._execute(built)

    # =========================================================================
    # Internals
    # =========================================================================

    def _execute(self, built: BuildResult) -> OperationResult:
        if isinstance(built, ValidationResult):
            logger.info(f"Validation failed: {sorted(built.errors)}")
            return built
        response = self._send(built)
        return response if response else {}

    def _send(self, request: ApiRequest) -> Optional[JsonValue]:
        logger.debug(f"Dispatching operation '{request.operation}'")
        return self.transport.send(request, token=self.session.token)
