"""Map the --detail option onto DetailLevel."""

from __future__ import annotations

from .contracts import DetailLevel
from .errors import InvalidDetailLevel

_BY_TOKEN = {level.value: level for level in DetailLevel}


def map_detail(token: str) -> DetailLevel:
    """Case-insensitive exact lookup; anything else raises InvalidDetailLevel."""
    try:
        return _BY_TOKEN[token.lower()]
    except (KeyError, AttributeError):
        raise InvalidDetailLevel(str(token)) from None
