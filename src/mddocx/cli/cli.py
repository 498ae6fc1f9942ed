"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mddocx.cli.commands import docx2md_cmd, md2docx_cmd, styles_cmd


app = typer.Typer(name="mddocx", no_args_is_help=True, help="Markdown <-> Word document converter")

app.command(name="md2docx")(md2docx_cmd)
app.command(name="docx2md")(docx2md_cmd)
app.command(name="styles")(styles_cmd)
