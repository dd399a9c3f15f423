from __future__ import annotations

import re
from collections.abc import Collection
from urllib.parse import urlparse

# Browsers read "\" as "/" and drop tabs/newlines, so urlparse would see a
# different host than the one Chromium navigates to.
_AMBIGUOUS_RE = re.compile(r"[\\\x00-\x20\x7f]")


def is_allowed_target(candidate: str | None, allowed_hosts: Collection[str]) -> bool:
    # Exact hostname match: no subdomains, no wildcards, any scheme.
    if not candidate or _AMBIGUOUS_RE.search(candidate):
        return False
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
        parsed.port  # raises on out-of-range or non-numeric ports
    except ValueError:
        return False
    if not parsed.scheme or not parsed.netloc or not hostname:
        return False
    return hostname in allowed_hosts
