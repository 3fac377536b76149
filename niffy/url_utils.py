"""Shared URL utilities — join hosts with logical paths and label hosts by role."""

from __future__ import annotations

from niffy.models.result import Role


def host_url(host: str, path: str) -> str:
    """Build the URL for a logical path on a host.

    The host is used as a plain prefix, so ``host_url("http://a.com", "/x")``
    is ``"http://a.com/x"``.
    """
    return host + path


def role_for_host(host: str, base_host: str) -> Role:
    """Return the role label a host plays in a comparison."""
    return Role.BASE if host == base_host else Role.TEST
