"""Page metadata for notes: titles, canonical URLs, robots and OpenGraph."""

from dataclasses import asdict, dataclass

from notestage.core.frontmatter import FrontMatter
from notestage.core.wikilinks import NOTE_PREFIX

DEFAULT_SITE_NAME = "Blog"
DESCRIPTION_TEMPLATE = "Note: {title}"

ROBOTS_PUBLIC = "index,follow"
ROBOTS_PRIVATE = "noindex,nofollow"


@dataclass(frozen=True)
class OpenGraph:
    """Social preview fields."""

    title: str
    description: str
    url: str
    type: str = "article"
    image: str | None = None
    published_time: str | None = None


@dataclass(frozen=True)
class PageMetadata:
    """Presentation metadata for a note page."""

    title: str
    description: str
    canonical: str
    robots: str
    og: OpenGraph

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def generate_metadata(
    front_matter: FrontMatter,
    slug: str,
    site_name: str = DEFAULT_SITE_NAME,
) -> PageMetadata:
    """Derive page metadata from front matter.

    Args:
        front_matter: Parsed front matter of the note
        slug: Requested slug
        site_name: Site name appended to page titles

    Returns:
        PageMetadata instance
    """
    title = front_matter.title or slug.replace("-", " ")
    full_title = title if title == site_name else f"{title} | {site_name}"
    description = front_matter.description or DESCRIPTION_TEMPLATE.format(title=title)

    if front_matter.domain:
        canonical = f"https://{front_matter.domain}{NOTE_PREFIX}{slug}"
    else:
        canonical = f"{NOTE_PREFIX}{slug}"

    return PageMetadata(
        title=full_title,
        description=description,
        canonical=canonical,
        robots=ROBOTS_PRIVATE if front_matter.is_private else ROBOTS_PUBLIC,
        og=OpenGraph(
            title=full_title,
            description=description,
            url=canonical,
            image=front_matter.cover,
            published_time=front_matter.date,
        ),
    )
