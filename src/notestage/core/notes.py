"""Note assembly and loading.

`assemble_note` turns a raw document into a Note. `NoteLoader` ties the
domain resolver, key builder and fetcher together for one configured site.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from notestage.core.domains import DEFAULT_PREVIEW_SUFFIXES, resolve_domain
from notestage.core.fetcher import FetchResult, fetch_raw
from notestage.core.frontmatter import FrontMatter, parse_front_matter
from notestage.core.keys import build_keys, index_keys, partial_key
from notestage.core.renderer import MarkdownRenderer
from notestage.core.storage import ContentStore, HttpStore
from notestage.core.wikilinks import rewrite_wikilinks

logger = logging.getLogger(__name__)

LEADING_HEADING_RE = re.compile(r"#\s+")


@dataclass(frozen=True)
class Note:
    """A resolved, rendered note."""

    front_matter: FrontMatter
    raw_body: str  # markdown after front matter removal and wikilink rewriting
    html: str
    slug: str
    has_leading_heading: bool
    source_key: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "slug": self.slug,
            "front_matter": self.front_matter.to_dict(),
            "has_leading_heading": self.has_leading_heading,
            "source_key": self.source_key,
        }


def has_leading_heading(body: str) -> bool:
    """Whether the body opens with a level-1 heading (`# Title`)."""
    return LEADING_HEADING_RE.match(body.lstrip()) is not None


def assemble_note(
    raw_document: str,
    slug: str,
    renderer: MarkdownRenderer,
    *,
    source_key: str | None = None,
) -> Note:
    """Assemble a Note from a raw markdown document.

    Args:
        raw_document: Document including any front matter
        slug: Requested slug
        renderer: Markdown renderer
        source_key: Storage key the document came from

    Returns:
        Assembled Note
    """
    front_matter, body = parse_front_matter(raw_document)
    body = rewrite_wikilinks(body)
    return Note(
        front_matter=front_matter,
        raw_body=body,
        html=renderer.render(body),
        slug=slug,
        has_leading_heading=has_leading_heading(body),
        source_key=source_key,
    )


def render_fragment(
    raw_document: str,
    renderer: MarkdownRenderer,
    *,
    append_markdown_sibling: bool = False,
) -> str:
    """Render an index page or partial, dropping its front matter."""
    _, body = parse_front_matter(raw_document)
    return renderer.render(rewrite_wikilinks(body, append_markdown_sibling))


class NoteLoader:
    """Loads notes for a site from its configured stores.

    The primary store is probed before the HTTP mirror for every candidate
    key. Either may be absent.
    """

    def __init__(
        self,
        renderer: MarkdownRenderer,
        *,
        fallback_domain: str,
        store: ContentStore | None = None,
        mirror: HttpStore | None = None,
        preview_suffixes: Iterable[str] = DEFAULT_PREVIEW_SUFFIXES,
    ) -> None:
        """Initialize loader.

        Args:
            renderer: Shared markdown renderer
            fallback_domain: Domain served on local and preview hosts
            store: Primary content store
            mirror: HTTP mirror probed after the primary store
            preview_suffixes: Host suffixes of preview deployments
        """
        self._renderer = renderer
        self._fallback_domain = fallback_domain
        self._store = store
        self._mirror = mirror
        self._preview_suffixes = tuple(preview_suffixes)

    @property
    def renderer(self) -> MarkdownRenderer:
        return self._renderer

    @property
    def store(self) -> ContentStore | None:
        return self._store

    @property
    def mirror(self) -> HttpStore | None:
        return self._mirror

    def resolve_domain(self, host: str) -> str:
        """Resolve a request host to its content domain."""
        return resolve_domain(host, self._fallback_domain, self._preview_suffixes)

    async def load_raw(self, slug: str, domain: str | None) -> FetchResult | None:
        """Fetch the raw markdown for a slug.

        Args:
            slug: Requested slug
            domain: Resolved content domain

        Returns:
            FetchResult, or None if no candidate key exists

        Raises:
            ValueError: If the slug is empty
        """
        keys = build_keys(slug, domain)
        result = await fetch_raw(keys, self._store, self._mirror)
        if result is not None:
            logger.info(f"Resolved {slug!r} for {domain} to {result.key} ({result.tier})")
        return result

    async def load_note(self, slug: str, domain: str | None) -> Note | None:
        """Fetch and assemble a note.

        Args:
            slug: Requested slug
            domain: Resolved content domain

        Returns:
            Note, or None if not found
        """
        result = await self.load_raw(slug, domain)
        if result is None:
            return None
        return assemble_note(result.text, slug, self._renderer, source_key=result.key)

    async def load_index(
        self,
        domain: str | None,
        append_markdown_sibling: bool = True,
    ) -> str | None:
        """Render the index page of a domain, with `.md` links by default."""
        result = await fetch_raw(index_keys(domain), self._store, self._mirror)
        if result is None:
            return None
        return render_fragment(
            result.text,
            self._renderer,
            append_markdown_sibling=append_markdown_sibling,
        )

    async def load_partial(
        self,
        name: str,
        domain: str | None,
        append_markdown_sibling: bool = False,
    ) -> str | None:
        """Render a per-domain partial. Partials only exist for a known domain."""
        if not domain:
            return None

        result = await fetch_raw([partial_key(name, domain)], self._store, self._mirror)
        if result is None:
            return None
        return render_fragment(
            result.text,
            self._renderer,
            append_markdown_sibling=append_markdown_sibling,
        )
