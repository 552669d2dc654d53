"""Building the public short link shown to users.

Behind a reverse proxy the front end sees its internal address, so the
scheme, host and path prefix are taken from X-Forwarded-* headers first,
then from the request itself, then from configuration.
"""

from typing import Dict, Mapping, Optional
from urllib.parse import quote


def _first_value(value: Optional[str]) -> Optional[str]:
    # Chained proxies append: "client, proxy1, proxy2"
    if not value:
        return None
    first = value.split(",")[0].strip()
    return first or None


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Pick the X-Forwarded-* values out of request headers (case-insensitive).

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for, forwarded_prefix
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    return {
        "forwarded_proto": _first_value(lowered.get("x-forwarded-proto")),
        "forwarded_host": _first_value(lowered.get("x-forwarded-host")),
        "forwarded_for": _first_value(lowered.get("x-forwarded-for")),
        "forwarded_prefix": lowered.get("x-forwarded-prefix"),
    }


def normalize_prefix(prefix: Optional[str]) -> str:
    """'/s/', 's' and '/s' all become '/s'; empty or '/' becomes ''."""
    cleaned = (prefix or "").strip().strip("/")
    return "/" + cleaned if cleaned else ""


def resolve_path_prefix(headers: Mapping[str, str], configured_prefix: str = "") -> str:
    """X-Forwarded-Prefix (set by a proxy that strips it) wins over the configured prefix."""
    forwarded = normalize_prefix(extract_forwarded_headers(headers)["forwarded_prefix"])
    return forwarded or normalize_prefix(configured_prefix)


def resolve_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Scheme and host for public links, without a trailing slash.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config
    """
    forwarded = extract_forwarded_headers(headers)
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def build_short_url(path: str, base_url: str, path_prefix: str = "") -> str:
    """e.g. ('abc123', 'https://sho.rt', '/s') -> 'https://sho.rt/s/abc123'."""
    return f"{base_url.rstrip('/')}{normalize_prefix(path_prefix)}/{quote(path, safe='')}"
