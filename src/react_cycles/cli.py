"""CLI entry point for react-cycles."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from react_cycles import __version__
from react_cycles.analyzer.models import AnalysisResult
from react_cycles.analyzer.service import AnalysisSession
from react_cycles.config import load_config
from react_cycles.errors import InputPathError
from react_cycles.utils import discover_files


@click.command()
@click.option(
    "-e", "--entry",
    default=None,
    help="Entry point file or directory (default: config entry, else the current directory).",
)
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: ./react-cycles.yaml if present).",
)
@click.option(
    "-i", "--ignore",
    multiple=True,
    help="Directory or file name to skip (repeatable).",
)
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "md", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Write the report to this file instead of stdout.",
)
@click.option("--graph", "show_graph", is_flag=True, default=False,
              help="Print the complete dependency graph.")
@click.option("--progress", is_flag=True, default=False,
              help="Show a progress bar while files are analyzed.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    entry: str | None,
    config_path: str | None,
    ignore: tuple[str, ...],
    fmt: str,
    output: str | None,
    show_graph: bool,
    progress: bool,
    verbose: bool,
) -> None:
    """Detect circular state dependencies in a React project.

    Exits with status 1 when any cycle is reported.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    config = load_config(config_path)
    entry_point = entry or config.entry or str(Path.cwd())
    ignore_list = [*config.ignore, *ignore]

    try:
        files = discover_files(entry_point, ignore_list)
    except InputPathError as exc:
        raise click.ClickException(str(exc)) from exc

    session = AnalysisSession(files, entry=str(Path(entry_point).expanduser()))
    if progress:
        with click.progressbar(session.files, label="Analyzing", file=sys.stderr) as bar:
            for fpath in bar:
                session.analyze_file(fpath)
    else:
        session.analyze_all()
    result = session.finalize()

    if show_graph and fmt != "json":
        click.echo(session.graph.format_graph())
        click.echo("")

    if fmt == "json":
        _output_json(result, output)
    elif fmt == "md":
        _output_md(result, output)
    else:
        _output_text(result, output)

    ctx.exit(1 if result.has_cycles else 0)


def _output_text(result: AnalysisResult, output: str | None) -> None:
    from react_cycles.render.text import render_text
    if output:
        Path(output).write_text(render_text(result, color=False))
        click.echo(f"Report written to {output}")
    else:
        click.echo(render_text(result))


def _output_md(result: AnalysisResult, output: str | None) -> None:
    from react_cycles.render.markdown import render_markdown
    md = render_markdown(result)
    if output:
        Path(output).write_text(md)
        click.echo(f"Report written to {output}")
    else:
        click.echo(md)


def _output_json(result: AnalysisResult, output: str | None) -> None:
    text = json.dumps(result.model_dump(mode="json", by_alias=True), indent=2)
    if output:
        Path(output).write_text(text)
        click.echo(f"JSON report written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
