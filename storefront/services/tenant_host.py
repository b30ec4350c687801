"""Derive the tenant (store subdomain) named by an inbound request host.

Wildcard DNS does not reach this code on every hosting platform, so the
path-based ``/store/{subdomain}`` route stays the contract that always works;
host extraction is a convenience layered on top of it.
"""

import re

from storefront.core.config import settings

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "[::1]", "::1"})
RESERVED_INFRA_LABELS = frozenset({"www", "api", "admin"})
LABEL_RE = re.compile(r"^[a-z0-9-]+$")
STORE_PATH_RE = re.compile(r"^/store/([^/]+)")


def _strip_port(host: str) -> str:
    if host.startswith("["):
        # IPv6 literal, e.g. [::1]:8000
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    return host.split(":", 1)[0]


def is_local_host(host: str) -> bool:
    host = _strip_port(host.strip().lower())
    if host in LOCAL_HOSTS or host in settings.dev_hosts_list:
        return True
    return host.endswith(".localhost")


def extract_subdomain(hostname: str | None, path: str = "/") -> str | None:
    """Return the candidate subdomain for ``hostname`` or None.

    A ``/store/{subdomain}`` path names the tenant on any host, local ones
    included, and wins over the host.
    """
    match = STORE_PATH_RE.match(path or "")
    if match:
        label = match.group(1).lower()
        return label if LABEL_RE.match(label) else None

    if not hostname:
        return None

    host = _strip_port(hostname.strip().lower()).rstrip(".")
    if is_local_host(host):
        return None

    base = settings.BASE_DOMAIN.lower()
    if host == base:
        return None
    if host.endswith(f".{base}"):
        label = host[: -len(base) - 1].split(".")[0]
        if label in ("", "www", settings.PRODUCT_LABEL.lower()):
            return None
        return label

    if any(host.endswith(suffix) for suffix in settings.preview_host_suffixes_list):
        return None

    parts = host.split(".")
    if len(parts) < 3 or all(p.isdigit() for p in parts):
        return None
    first = parts[0]
    if first in RESERVED_INFRA_LABELS or not LABEL_RE.match(first):
        return None
    return first
