"""Principal normalization at the transport boundary.

Callers may identify a principal either by its bare id or by a chat-style
mention string (``<@123>`` or ``<@!123>``). The services only ever see the
bare id.
"""

from __future__ import annotations

import re

from permissions.domain.value_objects import MAX_IDENTIFIER_LENGTH

_MENTION = re.compile(r"^<@!?(?P<id>[^<>@!\s]+)>$")


def normalize_principal(raw: str) -> str:
    """Return the bare principal id for ``raw``.

    Args:
        raw: Principal as supplied by the caller

    Returns:
        The normalized principal id

    Raises:
        ValueError: If ``raw`` is empty, a malformed mention, or longer than
            MAX_IDENTIFIER_LENGTH once normalized
    """
    value = raw.strip()
    if not value:
        raise ValueError("principal must not be empty")

    match = _MENTION.match(value)
    if match is not None:
        value = match.group("id")
    elif value.startswith("<") or value.endswith(">"):
        raise ValueError(f"malformed principal mention: {raw!r}")
    elif any(ch.isspace() for ch in value):
        raise ValueError(f"principal must not contain whitespace: {raw!r}")

    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"principal must be at most {MAX_IDENTIFIER_LENGTH} characters"
        )
    return value
