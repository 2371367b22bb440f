"""Wikilink rewriting.

Turns `[[Some Note]]` into `[Some Note](/n/some-note)` and, for index
listings, adds a `([.md](/n/some-note.md))` link to the raw markdown.
"""

import re

NOTE_PREFIX = "/n/"

WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")
# A note link not already followed by its raw markdown sibling
NOTE_LINK_RE = re.compile(r"\[([^\]]+)\]\(/n/([^)]+)\)(?! \(\[\.md\]\(/n/)")
WHITESPACE_RE = re.compile(r"\s+")


def wikilink_slug(text: str) -> str:
    """Slug a wikilink target: lowercase, whitespace runs become one hyphen."""
    return WHITESPACE_RE.sub("-", text.lower())


def rewrite_wikilinks(body: str, append_markdown_sibling: bool = False) -> str:
    """Rewrite wikilinks into site-relative note links.

    Args:
        body: Markdown body
        append_markdown_sibling: Also link every `/n/` note to its `.md` source

    Returns:
        Markdown with wikilinks replaced
    """
    rewritten = WIKILINK_RE.sub(_note_link, body)
    if append_markdown_sibling:
        rewritten = NOTE_LINK_RE.sub(_with_sibling, rewritten)
    return rewritten


def _note_link(match: re.Match[str]) -> str:
    text = match.group(1)
    return f"[{text}]({NOTE_PREFIX}{wikilink_slug(text)})"


def _with_sibling(match: re.Match[str]) -> str:
    slug = match.group(2)
    if slug.endswith(".md"):
        return match.group(0)
    return f"{match.group(0)} ([.md]({NOTE_PREFIX}{slug}.md))"
