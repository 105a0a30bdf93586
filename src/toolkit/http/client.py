import json
import time
from collections.abc import Mapping
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config.settings import DEFAULT_TIMEOUT, get_http_settings
from ..logging.setup import correlation_headers

logger = structlog.get_logger(__name__)

CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_MULTIPART_FORM = "multipart/form-data"


class _RequestBuilder:
    """Shared request configuration for the sync and async builders"""

    def __init__(
        self,
        timeout: float | None = None,
        verify: bool = True,
        trace: bool = False,
    ):
        self.timeout = timeout if timeout is not None else _default_timeout()
        self.verify = verify
        self.trace = trace
        self.headers = httpx.Headers()
        self._body: dict[str, Any] = {}
        self._form_data: dict[str, str] | None = None
        self._files: dict[str, tuple[str, Any]] | None = None

    def set_headers(self, headers: Mapping[str, str] | None):
        if headers:
            self.headers.update(headers)
        return self

    def set_header(self, key: str, value: str):
        self.headers[key] = value
        return self

    def set_body(self, body: Any):
        """
        Attach a request body

        bytes and str are sent as-is, file-like objects are read and sent
        as-is, pydantic models and any other value are encoded as JSON.
        """
        if body is None:
            self._body = {}
        elif isinstance(body, (bytes, bytearray, str)):
            self._body = {"content": body}
        elif hasattr(body, "read"):
            self._body = {"content": body.read()}
        elif isinstance(body, BaseModel):
            self._body = {"content": body.model_dump_json()}
            self.headers.setdefault(CONTENT_TYPE, CONTENT_TYPE_JSON)
        else:
            self._body = {"json": body}
        return self

    def set_form_data(self, form_data: Mapping[str, str] | None):
        self._form_data = dict(form_data or {})
        return self

    def set_file_reader(self, param: str, file_name: str, reader: Any):
        """Attach one file part; the request becomes multipart/form-data"""
        if self._files is None:
            self._files = {}
        self._files[param] = (file_name, reader)
        return self

    def _client_kwargs(self) -> dict[str, Any]:
        """Build client configuration"""
        settings = get_http_settings()
        headers = httpx.Headers()

        if settings.user_agent:
            headers["User-Agent"] = settings.user_agent

        # Add correlation and trace headers if available
        if settings.propagate_correlation:
            headers.update(correlation_headers())

        # Caller headers win
        headers.update(self.headers)

        if self._files is not None:
            # httpx must write multipart/form-data with its own boundary
            headers.pop(CONTENT_TYPE, None)

        return {
            "timeout": self.timeout,
            "verify": self.verify,
            "headers": headers,
        }

    def _request_kwargs(self) -> dict[str, Any]:
        """Build body arguments for the request"""
        if self._files is not None:
            return {"data": self._form_data or {}, "files": self._files}
        if self._form_data is not None:
            return {"data": self._form_data}
        return dict(self._body)

    def _log_request(self, method: str, url: str) -> None:
        logger.debug(
            "Making HTTP request",
            method=method,
            url=url,
            timeout=self.timeout,
            verify=self.verify,
        )

    def _log_response(self, method: str, url: str, response: httpx.Response, started: float) -> None:
        if self.trace:
            logger.debug(
                "HTTP response received",
                method=method,
                url=url,
                status_code=response.status_code,
                http_version=response.http_version,
                response_time_ms=(time.perf_counter() - started) * 1000,
            )
        else:
            logger.debug("HTTP response received", method=method, url=url, status_code=response.status_code)


class Request(_RequestBuilder):
    """Single-use HTTP request builder

    Non-2xx responses are returned like any other response; only transport
    and setup failures raise.
    """

    def _make_request(self, method: str, url: str) -> httpx.Response:
        """Execute the request on a fresh client"""
        with httpx.Client(**self._client_kwargs()) as client:
            self._log_request(method, url)
            started = time.perf_counter()
            try:
                response = client.request(method, url, **self._request_kwargs())
            except httpx.RequestError as e:
                logger.error("HTTP request failed", method=method, url=url, error=str(e))
                raise

            self._log_response(method, url, response, started)
            return response

    def get(self, url: str) -> httpx.Response:
        """Make GET request"""
        return self._make_request("GET", url)

    def post(self, url: str) -> httpx.Response:
        """Make POST request"""
        return self._make_request("POST", url)


class AsyncRequest(_RequestBuilder):
    """Single-use HTTP request builder for asyncio callers"""

    async def _make_request(self, method: str, url: str) -> httpx.Response:
        """Execute the request on a fresh async client"""
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            self._log_request(method, url)
            started = time.perf_counter()
            try:
                response = await client.request(method, url, **self._request_kwargs())
            except httpx.RequestError as e:
                logger.error("HTTP request failed", method=method, url=url, error=str(e))
                raise

            self._log_response(method, url, response, started)
            return response

    async def get(self, url: str) -> httpx.Response:
        """Make GET request"""
        return await self._make_request("GET", url)

    async def post(self, url: str) -> httpx.Response:
        """Make POST request"""
        return await self._make_request("POST", url)


def _default_timeout() -> float:
    return get_http_settings().timeout


def get_request(timeout: float | None = None) -> Request:
    """Create a request builder with TLS verification enabled"""
    return Request(timeout=timeout)


def get_https_request(timeout: float | None = None) -> Request:
    """Create a request builder that skips TLS certificate verification and traces timings"""
    return Request(timeout=timeout, verify=False, trace=True)


def get_async_request(timeout: float | None = None) -> AsyncRequest:
    """Async counterpart of get_request"""
    return AsyncRequest(timeout=timeout)


def get_async_https_request(timeout: float | None = None) -> AsyncRequest:
    """Async counterpart of get_https_request"""
    return AsyncRequest(timeout=timeout, verify=False, trace=True)


def _decode_entity(body: bytes, entity: Any) -> Any:
    """Decode a JSON body, validating it against ``entity`` when given"""
    try:
        if entity is None:
            return json.loads(body)
        return TypeAdapter(entity).validate_json(body)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Json transform error", entity=getattr(entity, "__name__", repr(entity)), error=str(e))
        raise


def get(url: str) -> bytes:
    """Send a GET request and return the response body"""
    return get_request().get(url).content


def get_with_headers(url: str, headers: Mapping[str, str] | None) -> bytes:
    """Send a GET request with custom headers"""
    return get_request().set_headers(headers).get(url).content


def https_get(url: str) -> bytes:
    """Send a GET request without TLS certificate verification"""
    return get_https_request().get(url).content


def https_get_with_headers(url: str, headers: Mapping[str, str] | None) -> bytes:
    """Send a GET request with custom headers, without TLS certificate verification

    Meant for self-signed certificates and test environments.
    """
    return get_https_request().set_headers(headers).get(url).content


def get_with_entity(
    url: str,
    entity: Any = None,
    headers: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """
    Send a GET request and decode the JSON response

    Args:
        url: Target URL
        entity: Type to validate the response into (pydantic model, dataclass,
            ``dict[str, Any]``...). None returns the plain decoded JSON.
        headers: Custom request headers
        timeout: Timeout in seconds, defaults to the configured timeout

    Raises:
        httpx.RequestError: on transport failures
        json.JSONDecodeError, pydantic.ValidationError: when the body does not decode
    """
    response = get_request(timeout).set_headers(headers).get(url)
    return _decode_entity(response.content, entity)


def get_with_timeout(url: str, headers: Mapping[str, str] | None, timeout: float) -> bytes:
    """Send a GET request with custom headers and timeout"""
    return get_request(timeout).set_headers(headers).get(url).content


def https_get_with_timeout(url: str, headers: Mapping[str, str] | None, timeout: float) -> bytes:
    """Send a GET request with custom headers and timeout, without TLS certificate verification"""
    return get_https_request(timeout).set_headers(headers).get(url).content


def post(url: str, body: Any, headers: Mapping[str, str] | None) -> bytes:
    """Send a POST request and return the response body"""
    return get_request().set_headers(headers).set_body(body).post(url).content


def post_with_timeout(url: str, body: Any, headers: Mapping[str, str] | None, timeout: float) -> bytes:
    """Send a POST request with a custom timeout"""
    return get_request(timeout).set_headers(headers).set_body(body).post(url).content


def https_post(url: str, body: Any, headers: Mapping[str, str] | None) -> bytes:
    """Send a POST request without TLS certificate verification"""
    return get_https_request().set_headers(headers).set_body(body).post(url).content


def https_post_with_timeout(url: str, body: Any, headers: Mapping[str, str] | None, timeout: float) -> bytes:
    """Send a POST request with a custom timeout, without TLS certificate verification"""
    return get_https_request(timeout).set_headers(headers).set_body(body).post(url).content


def post_with_entity(
    url: str,
    body: Any,
    headers: Mapping[str, str] | None,
    entity: Any = None,
    timeout: float | None = None,
) -> Any:
    """Send a POST request and decode the JSON response, see get_with_entity"""
    response = get_request(timeout).set_headers(headers).set_body(body).post(url)
    return _decode_entity(response.content, entity)


def post_json(url: str, body: Any, headers: Mapping[str, str] | None) -> bytes:
    """Send a POST request with Content-Type application/json"""
    request = get_request().set_headers(headers).set_header(CONTENT_TYPE, CONTENT_TYPE_JSON)
    return request.set_body(body).post(url).content


def post_form(url: str, form_data: Mapping[str, str] | None, headers: Mapping[str, str] | None) -> bytes:
    """Send an application/x-www-form-urlencoded POST request"""
    request = get_request().set_headers(headers).set_header(CONTENT_TYPE, CONTENT_TYPE_FORM)
    return request.set_form_data(form_data).post(url).content


def post_file(
    url: str,
    form_data: Mapping[str, str] | None,
    headers: Mapping[str, str] | None,
    param: str,
    file_name: str,
    reader: Any,
) -> bytes:
    """
    Send a multipart/form-data POST request with form fields and one file part

    Args:
        url: Target URL
        form_data: Plain form fields sent alongside the file
        headers: Custom request headers
        param: Form field name of the file part
        file_name: File name reported for the file part
        reader: Binary file-like object or bytes with the file content
    """
    request = get_request().set_headers(headers).set_form_data(form_data)
    return request.set_file_reader(param, file_name, reader).post(url).content


def https_post_with_timeout_res_header(
    url: str,
    body: Any,
    headers: Mapping[str, str] | None,
    timeout: float,
) -> tuple[bytes, httpx.Headers]:
    """Send a POST request without TLS certificate verification and return body and response headers"""
    response = get_https_request(timeout).set_headers(headers).set_body(body).post(url)
    return response.content, response.headers
