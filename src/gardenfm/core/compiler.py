"""Published frontmatter builder: raw note frontmatter -> canonical publish record"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from gardenfm.config import Settings
from gardenfm.core.models import CommaTags, NoTags, RewriteRule, TagList, TagsField
from gardenfm.core.paths import garden_path_for_note, parse_rewrite_rules, sanitize_permalink
from gardenfm.core.render import render_block
from gardenfm.core.utils.slug import generate_url_path


log = logging.getLogger(__name__)

HOME_TAG = "gardenEntry"
TAG_SPLIT_RE = re.compile(r",\s*")

# Editor-injected keys that are never part of the authored frontmatter.
IGNORED_KEYS = ("position",)


def read_tags(frontmatter: dict[str, Any]) -> TagsField:
    """Classify the raw `tags` value; blank strings and unknown shapes mean no tags."""
    raw = frontmatter.get("tags")
    if isinstance(raw, str):
        return CommaTags(raw) if raw.strip() else NoTags()
    if isinstance(raw, (list, tuple)):
        return TagList(tuple(raw))
    return NoTags()


def normalize_tags(tags: TagsField) -> list[str]:
    match tags:
        case CommaTags(text=text):
            return TAG_SPLIT_RE.split(text)
        case TagList(items=items):
            return list(items)
        case NoTags():
            return []
    raise TypeError(f"Unsupported tags field: {type(tags).__name__}")


@dataclass
class FrontmatterCompiler:
    """Builds the published frontmatter for a note and renders it as a block.

    Each step takes the authored frontmatter and the record built so far and
    returns a new record; no step reads a key written by another step. The
    path collaborators default to the garden's own rules and can be swapped
    for tests or other site layouts.
    """
    rewrite_rules:      list[RewriteRule] = field(default_factory=list)
    publish_marker:     str = "pub-blog"
    garden_path_for:    Callable[[str, list[RewriteRule]], str] = garden_path_for_note
    sanitize_permalink: Callable[[str], str] = sanitize_permalink
    generate_url_path:  Callable[[str, bool], str] = generate_url_path

    @classmethod
    def from_settings(cls, settings: Settings) -> "FrontmatterCompiler":
        return cls(
            rewrite_rules=parse_rewrite_rules(settings.path_rewrite_rules),
            publish_marker=settings.publish_marker,
        )

    def compile(self, frontmatter: dict[str, Any], path: str) -> str:
        """Return the delimited frontmatter block to publish for the note at path."""
        return render_block(self.build(frontmatter, path))

    def build(self, frontmatter: dict[str, Any], path: str) -> dict[str, Any]:
        """Return the canonical published frontmatter; the input mapping is not modified."""
        base = {k: v for k, v in (frontmatter or {}).items() if k not in IGNORED_KEYS}
        published: dict[str, Any] = {self.publish_marker: True}
        published = self.add_publish_date(base, published)
        published = self.add_permalink(base, published, path)
        published = self.add_default_pass_through(base, published)
        published = self.add_page_tags(base, published)
        log.debug("Compiled frontmatter for %s: %s", path, list(published))
        return published

    def garden_path(self, frontmatter: dict[str, Any], path: str) -> str:
        """Resolve where the note is served: `dg-path` when set, else the rewritten note path."""
        return (frontmatter or {}).get("dg-path") or self.garden_path_for(path, self.rewrite_rules)

    def add_publish_date(self, base: dict[str, Any], published: dict[str, Any]) -> dict[str, Any]:
        published = dict(published)
        if base.get("publishDate"):
            published["publishDate"] = base["publishDate"]
        return published

    def add_permalink(self, base: dict[str, Any], published: dict[str, Any], path: str) -> dict[str, Any]:
        """Record the garden path when it moves the note, and always set `permalink`."""
        published = dict(published)
        garden_path = self.garden_path(base, path)
        if garden_path != path:
            log.debug("Note %s relocated to %s", path, garden_path)
            published["dg-path"] = garden_path

        if base.get("dg-permalink"):
            published["dg-permalink"] = base["dg-permalink"]
            published["permalink"] = self.sanitize_permalink(str(base["dg-permalink"]))
        else:
            published["permalink"] = "/" + self.generate_url_path(str(garden_path), True)
        return published

    def add_default_pass_through(self, base: dict[str, Any], published: dict[str, Any]) -> dict[str, Any]:
        published = dict(published)
        for key in ("title", "description"):
            if base.get(key):
                published[key] = base[key]
        return published

    def add_page_tags(self, base: dict[str, Any], published: dict[str, Any]) -> dict[str, Any]:
        """Split or copy the authored tags, append `gardenEntry` for the home note."""
        published = dict(published)
        tags = normalize_tags(read_tags(base))
        if base.get("dg-home") and HOME_TAG not in tags:
            tags.append(HOME_TAG)
        if tags:
            published["tags"] = tags
        return published
