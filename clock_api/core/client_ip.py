"""Best-effort client address resolution from proxy headers."""

from __future__ import annotations

from typing import Mapping

FALLBACK_CLIENT_IP = "127.0.0.1"

# Most trusted proxy signal first.
_DIRECT_IP_HEADERS = ("cf-connecting-ip", "x-real-ip")
_FORWARDED_FOR_HEADER = "x-forwarded-for"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; Starlette Headers already are not.
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def get_client_ip(headers: Mapping[str, str]) -> str:
    """Return the originating client address for a request.

    Checks ``CF-Connecting-IP``, then ``X-Real-IP``, then the first hop of
    ``X-Forwarded-For``. Values are not validated as IP addresses.

    Args:
        headers: Inbound request headers.

    Returns:
        The client address, or ``127.0.0.1`` when no header is usable.
    """

    for name in _DIRECT_IP_HEADERS:
        value = _header(headers, name)
        if value:
            return value

    forwarded = _header(headers, _FORWARDED_FOR_HEADER)
    if forwarded:
        return forwarded.split(",")[0].strip()

    return FALLBACK_CLIENT_IP
