"""Grant matching for admin route identifiers.

Pure string-set logic with no knowledge of role configuration. A grant on a
route covers the route itself and every route nested under it; containment
only runs parent to child. Matching is case-sensitive and never raises.
"""

from __future__ import annotations

from typing import Iterable


def route_is_granted(granted: Iterable[str], requested: str) -> bool:
    """Check whether *requested* is covered by any route in *granted*.

    Covered means an exact match, or *requested* starting with
    ``grant + "/"``. Blank and non-string grants cover nothing.

    Args:
        granted: Route identifiers granted to the caller.
        requested: The route being opened (e.g. ``"/admin/food/dre"``).

    Returns:
        True if some grant covers the route, False otherwise.
    """
    if not isinstance(requested, str) or not requested:
        return False
    if granted is None:
        return False

    for grant in granted:
        if not isinstance(grant, str) or not grant.strip():
            continue
        if requested == grant or requested.startswith(grant + "/"):
            return True
    return False


def granted_under(granted: Iterable[str], root: str) -> list[str]:
    """Return the grants equal to *root* or nested beneath it."""
    if granted is None:
        return []
    return [
        grant for grant in granted
        if isinstance(grant, str) and (grant == root or grant.startswith(root + "/"))
    ]
