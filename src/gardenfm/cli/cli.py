"""CLI entrypoint: Typer app definition and command registration"""

import typer

from gardenfm.cli.commands import build_cmd, compile_cmd


app = typer.Typer(name="gardenfm", no_args_is_help=True, help="Compile publishable frontmatter for garden notes")

app.command(name="build")(build_cmd)
app.command(name="compile")(compile_cmd)
