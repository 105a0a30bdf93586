"""Context handles and RPC header propagation."""

from .context import Context
from .headers import (
    HeaderKey,
    get_rpc_header,
    get_rpc_headers,
    set_rpc_header,
    set_rpc_headers,
)

__all__ = [
    "Context",
    "HeaderKey",
    "get_rpc_header",
    "set_rpc_header",
    "get_rpc_headers",
    "set_rpc_headers",
]
