"""Process-wide store client management."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from .config import get_settings
from .logging import get_logger
from .riak.client import Client

logger = get_logger(__name__)

_client: Client | None = None


def init(
    url: str | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
    **options: Any,
) -> Client:
    """
    Initialize the default client used by documents without their own.

    Args:
        url: Store base URL (http://host:port); overrides host and port
        host: Store hostname (default: from settings)
        port: Store HTTP port (default: from settings)
        **options: Extra ``Client`` options (prefix, mapred_prefix, timeout)

    Example:
        >>> # Using a URL
        >>> init("http://riak.local:8098")
        >>>
        >>> # Using individual parameters
        >>> init(host="riak.local", port=8098, timeout=5)

    Returns:
        The new default client
    """
    global _client
    settings = get_settings()

    protocol = options.pop("protocol", settings.protocol)
    if url is not None:
        parts = urlsplit(url)
        protocol = parts.scheme or protocol
        host = parts.hostname or host
        port = parts.port or port

    options.setdefault("prefix", settings.http_prefix)
    options.setdefault("mapred_prefix", settings.mapred_prefix)
    options.setdefault("timeout", settings.timeout)

    if _client is not None:
        _client.close()
    _client = Client(
        host or settings.host,
        port or settings.port,
        protocol=protocol,
        **options,
    )
    logger.info("riak_client_initialized", base_url=_client.base_url)
    return _client


def get_client() -> Client:
    """Return the default client, creating it from settings on first use."""
    if _client is None:
        return init()
    return _client


def is_connected() -> bool:
    """Check whether a default client has been created."""
    return _client is not None


def close() -> None:
    """Close the default client's connection pool and forget it."""
    global _client
    if _client is not None:
        _client.close()
        _client = None


def reset() -> None:
    """Reset connection state (for testing)."""
    close()
