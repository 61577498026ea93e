"""Async Redis client creation for the key-value permission store.

The client is created once at start-up and owned by the store; there is
no module-level client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redis.asyncio import Redis, from_url

if TYPE_CHECKING:
    from infrastructure.settings import RedisSettings

__all__ = ["create_redis_client", "redact_redis_url"]


def create_redis_client(settings: RedisSettings) -> Redis:
    """Create an async Redis client from settings.

    Responses are decoded to ``str`` so member ids and descriptions come
    back as text.

    Args:
        settings: Redis connection settings

    Returns:
        Unconnected client; the pool connects lazily on first command
    """
    return from_url(
        settings.url,
        encoding="utf-8",
        decode_responses=True,
    )


def redact_redis_url(url: str) -> str:
    """Strip credentials from a Redis URL for logging."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    return f"{scheme}://***@{rest.rsplit('@', 1)[1]}"
