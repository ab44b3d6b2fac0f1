"""
REST client factory for the remote tour backend

Every verb resolves to either the parsed response body or an
`{"error": {...}}` value. Nothing raises across this boundary.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from tour_admin.core.config import Settings
from tour_admin.core.exceptions import ErrorCode, error_result

logger = logging.getLogger(__name__)

REQUEST_OPTIONS = frozenset({"params", "headers", "timeout", "url", "files", "data"})

ServiceResult = Any


def bearer(token: Optional[str]) -> str:
    """Render the Authorization header value; anonymous calls send a bare scheme."""
    token = (token or "").strip()
    if not token:
        return "Bearer"
    if token.lower().startswith("bearer "):
        return token
    return f"Bearer {token}"


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


def _message_from_body(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return fallback


def error_from_exception(exc: BaseException, base_url: str = "") -> dict:
    """Normalize a transport/HTTP exception into the `{error}` shape."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        body = _parse_body(response)
        status_code = response.status_code
        if status_code == 401:
            code = ErrorCode.INVALID_TOKEN
        elif status_code == 429:
            code = ErrorCode.RATE_LIMIT_EXCEEDED
        else:
            code = ErrorCode.BACKEND_HTTP_ERROR
        return error_result(
            status_code,
            _message_from_body(body, response.reason_phrase or "Request failed"),
            code,
            details=body,
        )
    if isinstance(exc, httpx.TimeoutException):
        logger.warning(f"Backend request timed out: {exc}")
        return error_result(None, "The backend did not answer in time", ErrorCode.BACKEND_TIMEOUT)
    if isinstance(exc, httpx.ConnectError):
        logger.warning(
            "Backend API is not available. Please ensure that backend server is running at: "
            f"{base_url}"
        )
        return error_result(None, "The backend is not reachable", ErrorCode.BACKEND_UNAVAILABLE)
    if isinstance(exc, httpx.HTTPError):
        logger.warning(f"Backend transport error: {type(exc).__name__}: {exc}")
        return error_result(None, str(exc) or type(exc).__name__, ErrorCode.BACKEND_UNAVAILABLE)
    logger.error(f"Unexpected error calling backend: {type(exc).__name__}: {exc}", exc_info=exc)
    return error_result(None, "Unexpected error", ErrorCode.INTERNAL_SERVER_ERROR)


class RestService:
    """
    Client for one backend resource

    Mirrors the verbs of the backend REST convention:
    get / count / create / update / patch / delete / get_by_id
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str,
        token: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/api/"
        self.endpoint = endpoint.strip("/")
        self.default_headers = {"Authorization": token}
        self.timeout = timeout
        self.transport = transport

    def _client(self, headers: Optional[Mapping[str, str]] = None, timeout: Optional[float] = None) -> httpx.AsyncClient:
        merged = {**self.default_headers, **(headers or {})}
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=merged,
            timeout=httpx.Timeout(timeout if timeout is not None else self.timeout),
            transport=self.transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> ServiceResult:
        """
        Per-call `config`: params, headers, timeout, url, files, data

        Option errors are reported like transport errors, as an `{error}` value.
        """
        config = config or {}
        try:
            unknown = set(config) - REQUEST_OPTIONS
            if unknown:
                raise TypeError(f"unknown request options: {', '.join(sorted(unknown))}")
            target = "/" + (config.get("url") or path).lstrip("/")
            kwargs: dict[str, Any] = {}
            params = config.get("params")
            if params:
                kwargs["params"] = {k: v for k, v in params.items() if v is not None}
            if config.get("files") is not None:
                kwargs["files"] = config["files"]
                if config.get("data"):
                    kwargs["data"] = config["data"]
            elif payload is not None:
                kwargs["json"] = payload
            async with self._client(config.get("headers"), config.get("timeout")) as client:
                response = await client.request(method, target, **kwargs)
                response.raise_for_status()
                return _parse_body(response)
        except Exception as exc:
            return error_from_exception(exc, self.base_url)

    async def get(self, **config: Any) -> ServiceResult:
        return await self._request("GET", self.endpoint, config=config)

    async def count(self, params: Optional[Mapping[str, Any]] = None, **config: Any) -> ServiceResult:
        if params is not None:
            config["params"] = params
        return await self._request("GET", f"count/{self.endpoint}", config=config)

    async def create(self, payload: Any = None, **config: Any) -> ServiceResult:
        return await self._request("POST", self.endpoint, payload, config)

    async def update(self, payload: Any = None, **config: Any) -> ServiceResult:
        return await self._request("PUT", self.endpoint, payload, config)

    async def patch(self, payload: Any = None, **config: Any) -> ServiceResult:
        return await self._request("PATCH", self.endpoint, payload, config)

    async def delete(self, **config: Any) -> ServiceResult:
        return await self._request("DELETE", self.endpoint, config=config)

    async def get_by_id(self, resource_id: str | int, **config: Any) -> ServiceResult:
        return await self._request("GET", f"{self.endpoint}/{resource_id}", config=config)


def create_service_rest(
    url: str,
    endpoint: str,
    token: str,
    *,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RestService:
    return RestService(url, endpoint, token, timeout=timeout, transport=transport)


class RestClientFactory:
    """Builds `RestService` instances sharing base URL, timeouts and transport."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        upload_timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        default_language: str = "es",
        default_currency: str = "MXN",
    ):
        self.base_url = base_url.strip()
        self.timeout = timeout
        self.upload_timeout = upload_timeout
        self.transport = transport
        self.default_language = default_language
        self.default_currency = default_currency

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RestClientFactory":
        return cls(
            settings.BACKEND_URL,
            timeout=settings.SERVICE_API_TIMEOUT,
            upload_timeout=settings.UPLOAD_TIMEOUT,
            transport=transport,
            default_language=settings.DEFAULT_LANGUAGE,
            default_currency=settings.DEFAULT_CURRENCY,
        )

    @property
    def configured(self) -> bool:
        return self.base_url != ""

    def service(self, endpoint: str, token: Optional[str] = "") -> RestService:
        return create_service_rest(
            self.base_url,
            endpoint,
            bearer(token),
            timeout=self.timeout,
            transport=self.transport,
        )
