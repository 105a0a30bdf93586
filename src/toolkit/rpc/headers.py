"""RPC header helpers on top of ``Context`` handles.

Headers are stored directly on the context chain under ``HeaderKey`` keys, so
they never collide with other values carried by the same chain and every
derived handle sees exactly the headers written along its own lineage.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from .context import Context


@dataclass(frozen=True, slots=True)
class HeaderKey:
    """Context key for a single RPC header"""

    name: str


def get_rpc_header(ctx: Context | None, key: str) -> tuple[str, bool]:
    """
    Get a header value from the context

    Returns:
        (value, True) when the header is set, ("", False) when the context is
        None, the header is missing, or the stored value is not a string.
    """
    if ctx is None:
        return "", False

    value = ctx.lookup(HeaderKey(key))
    if not isinstance(value, str):
        return "", False
    return value, True


def set_rpc_header(ctx: Context | None, key: str, value: str) -> Context:
    """Return a new context carrying the header; ``ctx`` is left untouched"""
    if ctx is None:
        ctx = Context.background()
    return ctx.with_value(HeaderKey(key), value)


def get_rpc_headers(ctx: Context | None) -> dict[str, str]:
    """Get every header set along the chain of ``ctx``, latest value per key"""
    if ctx is None:
        return {}

    latest: dict[str, object] = {}
    for key, value in ctx.entries():
        if isinstance(key, HeaderKey) and key.name not in latest:
            latest[key.name] = value

    # Oldest first reads more naturally when dumped into request headers
    return {name: value for name, value in reversed(latest.items()) if isinstance(value, str)}


def set_rpc_headers(ctx: Context | None, headers: Mapping[str, str]) -> Context:
    """Set several headers at once; the order keys are applied in is unspecified"""
    new_ctx = ctx if ctx is not None else Context.background()
    for key, value in headers.items():
        new_ctx = set_rpc_header(new_ctx, key, value)
    return new_ctx
