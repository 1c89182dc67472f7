"""
Order callback receiver - FastAPI wrapper.

The API notifies integrators about order state changes with a JSON POST
carrying a ``Signature`` header. ``CallbackServer`` verifies that header with
the user secret before any handler sees the payload.
"""

import inspect
import json
from typing import Any, Awaitable, Callable, Dict, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..engine.exceptions import SignatureVerificationError
from ..utils import logger
from .security import SIGNATURE_HEADER, require_valid_signature


CallbackHandler = Callable[[Dict[str, Any]], Union[Any, Awaitable[Any]]]
SecretProvider = Callable[[], str]


class CallbackServer(FastAPI):
    """FastAPI app that accepts signed order callbacks."""

    def __init__(
        self,
        secret: Union[str, SecretProvider],
        callback_path: str = "/callback",
        **fastapi_kwargs
    ):
        """Initialize callback server.

        Args:
            secret: User secret, or a callable returning the current one
                (e.g. ``client.get_secret``)
            callback_path: Route receiving callbacks (default: /callback)
            **fastapi_kwargs: FastAPI arguments (title, version, etc.)
        """
        super().__init__(**fastapi_kwargs)

        self._secret = secret
        self._handlers: list = []
        self.callback_path = callback_path

        self._setup_callback_endpoint(callback_path)

    def current_secret(self) -> str:
        return self._secret() if callable(self._secret) else self._secret

    def on_callback(self, handler: CallbackHandler) -> CallbackHandler:
        """Decorator registering a handler for verified callbacks.

        Handlers run in registration order; the value returned by the last
        one becomes the response body (``{"status": "ok"}`` when ``None``).

        Example:
            ```python
            @app.on_callback
            async def order_changed(payload):
                await mark_order(payload["order_number"], payload["status"])
            ```
        """
        self._handlers.append(handler)
        return handler

    async def _dispatch(self, payload: Dict[str, Any]) -> Any:
        result = None
        for handler in self._handlers:
            result = handler(payload)
            if inspect.isawaitable(result):
                result = await result
        return result

    def _setup_callback_endpoint(self, path: str) -> None:
        """Setup callback endpoint.

        Args:
            path: Endpoint path
        """
        @self.post(path)
        async def callback_receiver(request: Request):
            """Verify the callback signature, then hand the payload to the handlers."""
            try:
                payload = json.loads(await request.body() or b"null")
            except ValueError:
                payload = None

            if not isinstance(payload, dict):
                return JSONResponse(
                    status_code=400,
                    content={"error": "Callback body must be a JSON object"}
                )

            try:
                require_valid_signature(
                    self.current_secret(),
                    payload,
                    request.headers.get(SIGNATURE_HEADER),
                )
            except SignatureVerificationError as e:
                logger.warning(f"Rejected callback: {e}")
                return JSONResponse(
                    status_code=403,
                    content={"error": "Invalid signature"}
                )

            result = await self._dispatch(payload)
            return JSONResponse(
                status_code=200,
                content=result if result is not None else {"status": "ok"}
            )
