from __future__ import annotations

from .types import Permission

# primary host, then one per fallback
MAX_ATTEMPTS = 4


def host(application_id: str, permission: Permission, attempt: int) -> str:
    """Resolve the hostname for a request attempt.

    Attempt 0 targets the permission's primary host (DSN for reads, the
    indexing cluster for writes). Attempts 1..3 share the same fallback pool
    whatever the permission.
    """
    if attempt == 0:
        if permission == Permission.READ:
            return f"{application_id}-dsn.algolia.net"
        return f"{application_id}.algolia.net"
    if 1 <= attempt < MAX_ATTEMPTS:
        return f"{application_id}-{attempt}.algolianet.com"
    raise ValueError(f"No host for attempt {attempt} (max {MAX_ATTEMPTS - 1})")
