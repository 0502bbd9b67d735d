"""Publish pipeline: compile notes and write them under their garden paths"""

import logging
from pathlib import Path

from gardenfm.core.compiler import FrontmatterCompiler
from gardenfm.core.models import Note
from gardenfm.core.parse import discover_notes, read_note


log = logging.getLogger(__name__)


def publish_note(note: Note, compiler: FrontmatterCompiler) -> str:
    """Return the published note text: compiled frontmatter block followed by the body."""
    return compiler.compile(note.frontmatter, note.path) + note.body


def _output_path(note: Note, output_dir: Path, compiler: FrontmatterCompiler) -> Path:
    """Place the note at its garden path (`dg-path` override or rewritten vault path)."""
    target = (output_dir / str(compiler.garden_path(note.frontmatter, note.path)).lstrip('/')).resolve()
    if output_dir.resolve() not in target.parents:
        raise ValueError(f"garden path {target} is outside {output_dir}")
    return target


def run_build(
    root: Path,
    output_dir: Path,
    compiler: FrontmatterCompiler,
    ) -> list[tuple[Path, Path]]:
    """Publish every note under root into output_dir. Returns (source_path, output_file) pairs."""
    vault = root if root.is_dir() else root.parent
    out_root = output_dir.resolve()
    results = []
    for p in discover_notes(root):
        if out_root in p.resolve().parents:
            continue  # previously published output
        try:
            note = read_note(p, vault)
            out_file = _output_path(note, output_dir, compiler)
            out_file.parent.mkdir(parents=True, exist_ok=True)
            out_file.write_text(publish_note(note, compiler), encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to publish {p}: {e}") from e
        log.debug("Published %s -> %s", p, out_file)
        results.append((p, out_file))
    log.info("Published %d note(s) to %s", len(results), output_dir)
    return results
