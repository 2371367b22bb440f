"""Core type definitions."""

from typing import Literal

# Front matter values are never coerced beyond these two shapes
FrontMatterValue = str | list[str]

# Backing source that satisfied a fetch
Tier = Literal["store", "mirror"]

# Only "private" carries meaning; anything else renders as public
Status = Literal["public", "private"]
