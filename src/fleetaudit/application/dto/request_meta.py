"""Request metadata DTO."""

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class RequestMeta:
    """Client identity extracted from the triggering request."""

    ip_address: str | None = None
    user_agent: str | None = None


LOOPBACK_IP = "127.0.0.1"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _valid_ip(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip()
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return None
    return value


def client_ip(headers: Mapping[str, str]) -> str:
    """Resolve the client IP from proxy headers.

    Checked in order: X-Forwarded-For (first entry), X-Real-IP,
    CF-Connecting-IP; falls back to loopback. A header whose value is not
    an IP address is skipped.
    """
    forwarded = _header(headers, "x-forwarded-for")
    candidates = [
        forwarded.split(",")[0] if forwarded else None,
        _header(headers, "x-real-ip"),
        _header(headers, "cf-connecting-ip"),
    ]
    for candidate in candidates:
        ip = _valid_ip(candidate)
        if ip:
            return ip
    return LOOPBACK_IP


def request_meta_from_headers(headers: Mapping[str, str]) -> RequestMeta:
    """Build RequestMeta from raw request headers."""
    return RequestMeta(
        ip_address=client_ip(headers),
        user_agent=_header(headers, "user-agent") or "",
    )
