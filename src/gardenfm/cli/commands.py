"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from gardenfm.config import Settings, load_config
from gardenfm.core.compiler import FrontmatterCompiler
from gardenfm.core.parse import read_note
from gardenfm.core.pipeline import run_build
from gardenfm.util.log import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def compile_cmd(
    note: Annotated[Path, typer.Argument(help="Markdown note to compile")],
    vault: Annotated[Optional[str], typer.Option("--vault", help="Vault root that note paths are relative to")] = None,
    rules: Annotated[Optional[str], typer.Option("--rewrite-rules", help="Path rewrite rules, 'from:to' per line")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Print the published frontmatter block for a single note."""
    setup_logging(verbose)
    settings = _settings(overrides={"vault_dir": vault, "path_rewrite_rules": rules})
    compiler = FrontmatterCompiler.from_settings(settings)
    try:
        parsed = read_note(note, Path(settings.vault_dir))
    except (OSError, ValueError) as e:
        _fail(f"Cannot read {note}", e)
    typer.echo(compiler.compile(parsed.frontmatter, parsed.path), nl=False)


def build_cmd(
    vault: Annotated[Optional[str], typer.Argument(help="Vault directory or single note")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    rules: Annotated[Optional[str], typer.Option("--rewrite-rules", help="Path rewrite rules, 'from:to' per line")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Publish every note: compiled frontmatter + body, written under its garden path."""
    setup_logging(verbose)
    settings = _settings(overrides={"vault_dir": vault, "output_dir": out, "path_rewrite_rules": rules})
    compiler = FrontmatterCompiler.from_settings(settings)
    output_dir = Path(settings.output_dir)

    try:
        results = run_build(Path(settings.vault_dir), output_dir, compiler)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Published {len(results)} note(s) to {output_dir}/")
