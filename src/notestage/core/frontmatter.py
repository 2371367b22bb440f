"""Front matter extraction.

Notes may start with a `---` delimited block of `key: value` lines. The
grammar is deliberately small: scalars, optionally quoted, and flat
`[a, b]` sequences. It is not YAML and never raises.
"""

import re
from dataclasses import dataclass, field

from notestage.core.types import FrontMatterValue, Status

FRONT_MATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*\n(.*)\Z", re.DOTALL)

_SCALAR_FIELDS = ("title", "description", "date", "category", "domain", "cover")
_SEQUENCE_FIELDS = ("tags", "aliases")
_QUOTES = ('"', "'")


@dataclass(frozen=True)
class FrontMatter:
    """Typed view over a note's front matter.

    Recognized fields get their own attribute. Every other key is kept
    verbatim in `extra`. `fields` holds the block exactly as parsed.
    """

    title: str | None = None
    description: str | None = None
    date: str | None = None
    tags: tuple[str, ...] = ()
    category: str | None = None
    status: Status = "public"
    domain: str | None = None
    cover: str | None = None
    aliases: tuple[str, ...] = ()
    extra: dict[str, FrontMatterValue] = field(default_factory=dict)
    fields: dict[str, FrontMatterValue] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_private(self) -> bool:
        return self.status == "private"

    @classmethod
    def from_fields(cls, fields: dict[str, FrontMatterValue]) -> "FrontMatter":
        """Build a FrontMatter from raw parsed fields.

        A scalar given for a sequence field becomes a one-item sequence.
        A sequence given for a scalar field only survives in `extra`.

        Args:
            fields: Mapping produced by `parse_fields`

        Returns:
            FrontMatter instance
        """
        known: dict[str, object] = {}
        extra: dict[str, FrontMatterValue] = {}

        for key, value in fields.items():
            if key in _SCALAR_FIELDS and isinstance(value, str):
                known[key] = value
            elif key in _SEQUENCE_FIELDS:
                if isinstance(value, str):
                    known[key] = (value,) if value else ()
                else:
                    known[key] = tuple(value)
            elif key == "status" and isinstance(value, str):
                known["status"] = "private" if value == "private" else "public"
            else:
                extra[key] = value

        return cls(extra=extra, fields=dict(fields), **known)  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, FrontMatterValue]:
        """Every key of the block with its parsed value, typing rules not applied."""
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in self.fields.items()
        }


def parse_front_matter(document: str) -> tuple[FrontMatter, str]:
    """Split a document into front matter and body.

    The block must start at the very first character. Partial or malformed
    delimiter blocks are not front matter: the whole document is returned
    as body.

    Args:
        document: Raw markdown document

    Returns:
        Tuple of (front matter, body)
    """
    match = FRONT_MATTER_RE.match(document)
    if match is None:
        return FrontMatter(), document

    fields = parse_fields(match.group(1))
    return FrontMatter.from_fields(fields), match.group(2)


def parse_fields(block: str) -> dict[str, FrontMatterValue]:
    """Parse the inside of a front matter block.

    Args:
        block: Text between the delimiter lines

    Returns:
        Mapping of keys to strings or lists of strings
    """
    fields: dict[str, FrontMatterValue] = {}

    for line in block.split("\n"):
        key, sep, raw_value = line.partition(":")
        if not sep:
            continue

        key = key.strip()
        if not key:
            continue

        value = _unquote(raw_value.strip())
        if value.startswith("[") and value.endswith("]"):
            fields[key] = _parse_sequence(value[1:-1])
        else:
            fields[key] = value

    return fields


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _parse_sequence(content: str) -> list[str]:
    # Plain comma split: quoted items containing commas are not supported
    if not content.strip():
        return []

    items = []
    for item in content.split(","):
        item = item.strip()
        if item[:1] in _QUOTES:
            item = item[1:]
        if item[-1:] in _QUOTES:
            item = item[:-1]
        items.append(item)
    return items
