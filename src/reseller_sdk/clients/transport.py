"""
HTTP transport for the reseller API.

Executes exactly one HTTP request per call and decodes the JSON answer.
Each call opens its own ``httpx.Client`` (no connection reuse, no redirect
following) and closes it before returning.

Failure modes:
    - network/HTTP errors or an unreadable upload -> ``None`` (logged)
    - empty response body -> ``None``
    - non-empty body that is not JSON -> ``MalformedResponseError``
"""

import mimetypes
from contextlib import ExitStack
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import httpx
from pydantic import JsonValue, ValidationError

from ..config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..engine.exceptions import MalformedResponseError
from ..engine.validators import is_empty
from ..schemas.bases import json_adapter
from ..schemas.https import ApiRequest, ClientRequestHeader, HttpMethod
from ..utils import logger, error_context


def _form_value(value: Any) -> Union[str, List[str]]:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return [_form_value(v) for v in value]
    if value is None:
        return ""
    return str(value)


def guess_mime_type(path: str) -> str:
    """MIME type of an upload, detected from its file name."""
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or "application/octet-stream"


class HttpTransport:
    """
    Blocking JSON-over-HTTP caller bound to one API base URL.

    Usage:
        ```python
        transport = HttpTransport("https://accfarm.com/api/v1/", timeout=60)
        categories = transport.call("GET", "categories", token=my_token)
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            base_url: API base URL, paths are appended to it.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._transport = transport

    def send(self, request: ApiRequest, token: str = "") -> Optional[JsonValue]:
        """Execute a built ``ApiRequest``."""
        return self.call(
            request.method,
            request.path,
            request.params,
            use_auth_header=request.use_auth_header,
            token=token,
        )

    def call(
        self,
        method: Union[str, HttpMethod],
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        use_auth_header: bool = True,
        token: str = "",
    ) -> Optional[JsonValue]:
        """
        Send one request and decode the JSON response.

        Args:
            method: "GET" or "POST".
            path: Path relative to the base URL (e.g. "user/login").
            params: Query parameters (GET) or body fields (POST).
            use_auth_header: Attach ``Authorization: Bearer`` when a token is held.
            token: Current bearer token, empty when unauthenticated.

        Returns:
            Decoded JSON value, or ``None`` when the call produced no data.

        Raises:
            MalformedResponseError: If the body is not valid JSON.
        """
        method = HttpMethod(method)
        params = dict(params or {})
        url = self.base_url + path.lstrip("/")
        upload = params.get("file") if method is HttpMethod.POST else None
        multipart = not is_empty(upload)

        header = ClientRequestHeader(
            content_type=None if multipart else "application/json",
            authorization=f"Bearer {token}" if (use_auth_header and token) else None,
        )
        headers = header.model_dump(by_alias=True, exclude_none=True)

        logger.debug(f"{method.value} {url}")

        try:
            with ExitStack() as stack:
                kwargs: Dict[str, Any] = {"headers": headers}
                if method is HttpMethod.GET:
                    query = {k: _form_value(v) for k, v in params.items() if v is not None}
                    if query:
                        url = f"{url}?{urlencode(query, doseq=True)}"
                elif multipart:
                    kwargs["files"], kwargs["data"] = self._multipart(stack, params)
                else:
                    kwargs["json"] = params

                client = stack.enter_context(self._client())
                response = client.request(method.value, url, **kwargs)
                body = response.content
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.error(f"Request error for {method.value} {path}: {e} ({error_context()})")
            return None

        if not body or not body.strip():
            logger.warning(f"Empty response for {method.value} {path} (status {response.status_code})")
            return None

        return self._decode(path, body)

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=False,
            limits=httpx.Limits(max_keepalive_connections=0),
            transport=self._transport,
        )

    @staticmethod
    def _multipart(
        stack: ExitStack,
        params: Dict[str, Any],
    ) -> Tuple[Dict[str, Tuple[str, Any, str]], Dict[str, Any]]:
        file_path = str(params.pop("file"))
        handle = stack.enter_context(open(file_path, "rb"))
        files = {"file": ("file", handle, guess_mime_type(file_path))}
        data = {key: _form_value(value) for key, value in params.items()}
        return files, data

    @staticmethod
    def _decode(path: str, body: bytes) -> JsonValue:
        try:
            return json_adapter.validate_json(body)
        except ValidationError as e:
            snippet = body[:200].decode("utf-8", errors="replace")
            logger.error(f"Malformed JSON from {path}: {snippet!r}")
            raise MalformedResponseError(f"Malformed JSON response from '{path}'", path=path, body=snippet) from e
