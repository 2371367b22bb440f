"""Request host to content domain mapping."""

import re
from collections.abc import Iterable

from notestage.core.frontmatter import FrontMatter

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})
DEFAULT_PREVIEW_SUFFIXES = (".pages.dev",)

PORT_RE = re.compile(r":\d*\Z")


def resolve_domain(
    host: str,
    fallback_domain: str,
    preview_suffixes: Iterable[str] = DEFAULT_PREVIEW_SUFFIXES,
) -> str:
    """Resolve the content domain for a request host.

    Local and preview hosts have no content of their own and are served
    the fallback domain. Every other host is its own domain.

    Args:
        host: Value of the Host header (may include a port)
        fallback_domain: Domain used for local and preview hosts
        preview_suffixes: Host suffixes of preview deployments

    Returns:
        Resolved domain
    """
    domain = PORT_RE.sub("", host)

    if domain in LOCAL_HOSTS:
        return fallback_domain

    if any(domain.endswith(suffix) for suffix in preview_suffixes):
        return fallback_domain

    return domain


def matches_domain(front_matter: FrontMatter, domain: str | None) -> bool:
    """Check whether a note may be served on a domain.

    Notes without a `domain` field belong to every domain.
    """
    if not front_matter.domain:
        return True
    return front_matter.domain == domain
