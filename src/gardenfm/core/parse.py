"""Note discovery and frontmatter extraction"""

import re
from pathlib import Path
from typing import Any

import yaml

from gardenfm.core.models import Note


FRONTMATTER_RE = re.compile(r'^---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1) or "") or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_notes(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def read_note(path: Path, root: Path) -> Note:
    """Read a note and split it into frontmatter and body; path is stored relative to root."""
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = _strip_frontmatter(raw)
    try:
        rel = path.resolve().relative_to(root.resolve())
    except ValueError as e:
        raise ValueError(f"{path} is not inside vault {root}") from e
    return Note(path=rel.as_posix(), source=path, frontmatter=frontmatter, body=body)
