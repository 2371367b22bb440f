"""Tiered fetching of raw documents.

Candidate keys are probed strictly in order. For each key the primary
store is asked first, then the HTTP mirror. The first hit wins, so a
domain-specific document always shadows a shared one.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from notestage.core.storage import ContentStore, HttpStore
from notestage.core.types import Tier

logger = logging.getLogger(__name__)

# Errors that turn a single probe into a miss. InvalidURL and StreamError
# are not HTTPError subclasses.
PROBE_ERRORS = (
    httpx.HTTPError,
    httpx.InvalidURL,
    httpx.StreamError,
    OSError,
    UnicodeDecodeError,
)


@dataclass(frozen=True)
class FetchResult:
    """A raw document and where it was found."""

    key: str
    tier: Tier
    text: str


async def fetch_raw(
    keys: Sequence[str],
    store: ContentStore | None,
    mirror: HttpStore | None,
) -> FetchResult | None:
    """Fetch the first available document among candidate keys.

    Args:
        keys: Storage keys in priority order
        store: Primary store, if configured
        mirror: HTTP mirror, if configured

    Returns:
        FetchResult for the first hit, or None if every probe missed
    """
    for key in keys:
        if store is not None:
            text = await _probe(store, key, "store")
            if text is not None:
                return FetchResult(key=key, tier="store", text=text)

        if mirror is not None:
            text = await _probe(mirror, key, "mirror")
            if text is not None:
                return FetchResult(key=key, tier="mirror", text=text)

    logger.debug(f"No document found for keys: {list(keys)}")
    return None


async def _probe(source: ContentStore, key: str, tier: Tier) -> str | None:
    try:
        return await source.get(key)
    except PROBE_ERRORS as e:
        logger.error(f"Failed to load {key} from {tier}: {e}")
        return None
