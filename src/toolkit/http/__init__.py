"""HTTP request helpers built on httpx."""

from .client import (
    CONTENT_TYPE,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART_FORM,
    DEFAULT_TIMEOUT,
    AsyncRequest,
    Request,
    get,
    get_async_https_request,
    get_async_request,
    get_https_request,
    get_request,
    get_with_entity,
    get_with_headers,
    get_with_timeout,
    https_get,
    https_get_with_headers,
    https_get_with_timeout,
    https_post,
    https_post_with_timeout,
    https_post_with_timeout_res_header,
    post,
    post_file,
    post_form,
    post_json,
    post_with_entity,
    post_with_timeout,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "CONTENT_TYPE",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_MULTIPART_FORM",
    "Request",
    "AsyncRequest",
    "get_request",
    "get_https_request",
    "get_async_request",
    "get_async_https_request",
    "get",
    "get_with_headers",
    "https_get",
    "https_get_with_headers",
    "get_with_entity",
    "get_with_timeout",
    "https_get_with_timeout",
    "post",
    "post_with_timeout",
    "https_post",
    "https_post_with_timeout",
    "post_with_entity",
    "post_json",
    "post_form",
    "post_file",
    "https_post_with_timeout_res_header",
]
