"""Data models for frontmatter compilation: value variants, raw tag shapes, notes"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union


# --- serializer values ---

@dataclass(frozen=True)
class Null:
    """Missing value; renders as an empty scalar."""


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Number:
    value: int | float


@dataclass(frozen=True)
class Str:
    value: str


@dataclass(frozen=True)
class Seq:
    items: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Map:
    """Fallback for nested mappings; rendered as compact JSON, never as a block."""
    entries: dict[str, Any] = field(default_factory=dict)


Value = Union[Null, Bool, Number, Str, Seq, Map]


# --- raw tags field ---

@dataclass(frozen=True)
class CommaTags:
    """`tags: a, b, c` written as a single string."""
    text: str


@dataclass(frozen=True)
class TagList:
    items: tuple[str, ...]


@dataclass(frozen=True)
class NoTags:
    pass


TagsField = Union[CommaTags, TagList, NoTags]


# --- collaborators ---

@dataclass(frozen=True)
class RewriteRule:
    """Relocate notes whose path starts with `source` under `destination`."""
    source: str
    destination: str


@dataclass
class Note:
    """A note read from the vault, split into frontmatter and body."""
    path:        str             # POSIX path relative to the vault root
    source:      Path            # file on disk
    frontmatter: dict[str, Any]
    body:        str             # content after the frontmatter block
