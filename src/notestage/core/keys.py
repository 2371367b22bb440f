"""Storage key candidates for a slug.

Priority, highest first:

    <domain>/<slug>.md    content owned by the request domain
    shared/<slug>.md      content shared by every domain
    <slug>.md             legacy flat namespace

Slugs such as `shared/x`, `indexes/x` or `other.example/x` need no special
casing: their undecorated key is exactly the targeted key.
"""

SHARED_PREFIX = "shared"
INDEX_SLUG = "index"
MARKDOWN_SUFFIX = ".md"


def build_keys(slug: str, domain: str | None = None) -> list[str]:
    """Build the ordered, de-duplicated storage keys for a slug.

    Args:
        slug: Requested note slug (e.g. "guides/setup")
        domain: Resolved content domain, if known

    Returns:
        Storage keys in probe order

    Raises:
        ValueError: If the slug is empty
    """
    slug = slug.strip("/")
    if not slug:
        raise ValueError("Slug must not be empty")

    keys: list[str] = []
    if domain:
        _append_unique(keys, f"{domain}/{slug}{MARKDOWN_SUFFIX}")
    _append_unique(keys, f"{SHARED_PREFIX}/{slug}{MARKDOWN_SUFFIX}")
    _append_unique(keys, f"{slug}{MARKDOWN_SUFFIX}")
    return keys


def index_keys(domain: str | None = None) -> list[str]:
    """Keys for a domain's index page."""
    return build_keys(INDEX_SLUG, domain)


def partial_key(name: str, domain: str) -> str:
    """Key of a per-domain partial such as a header or footer."""
    return f"{domain}/{name.strip('/')}{MARKDOWN_SUFFIX}"


def _append_unique(keys: list[str], key: str) -> None:
    if key not in keys:
        keys.append(key)
