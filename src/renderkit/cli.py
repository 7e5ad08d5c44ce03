"""
renderkit CLI entry point.

Input data is read as YAML, so JSON documents work as well.
"""

from __future__ import annotations

import logging
from typing import Any, TextIO

import click
import yaml

from renderkit.config import FORMATS, RenderSettings, TemplateSettings, load_settings, setup_logging
from renderkit.context import ContextError
from renderkit.errors import RenderError
from renderkit.format import CRLF, indent, line_ending, prefix, pretty, with_format
from renderkit.options import Option, dump, separator
from renderkit.templates import FSLoader, LoaderConfig, html, load, text

logger = logging.getLogger(__name__)


def _read_data(input_file: TextIO) -> Any:
    try:
        return yaml.safe_load(input_file.read())
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid input data: {e}") from e


def _csv_records(data: Any) -> Any:
    # YAML scalars arrive typed; CSV cells must be strings
    if isinstance(data, list) and all(isinstance(row, list) for row in data):
        return [["" if cell is None else str(cell) for cell in row] for row in data]
    return data


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML or JSON settings file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """renderkit - render data as text, JSON, XML, CSV, YAML or templates."""
    try:
        settings = load_settings(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(verbose=verbose, level=settings.logging.level, fmt=settings.logging.format)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command("render")
@click.argument("format_name", metavar="FORMAT", type=click.Choice([f for f in FORMATS if f != "binary"]))
@click.argument("input_file", metavar="[INPUT]", type=click.File("r"), default="-")
@click.option("--pretty", "use_pretty", is_flag=True, help="Enable pretty output")
@click.option("--indent", "indent_unit", default="", help="Indentation unit for pretty output")
@click.option("--prefix", "line_prefix", default="", help="Prefix for each output line in pretty mode")
@click.option("--crlf", is_flag=True, help="Use CRLF line endings")
@click.option("--separator", "sep", default=None, help="CSV field separator")
@click.option("--buffered", is_flag=True, help="Write output only if rendering succeeds")
@click.option("--show-options", is_flag=True, help="Print the resolved render options to stderr")
@click.pass_context
def render_cmd(
    ctx: click.Context,
    format_name: str,
    input_file: TextIO,
    use_pretty: bool,
    indent_unit: str,
    line_prefix: str,
    crlf: bool,
    sep: str | None,
    buffered: bool,
    show_options: bool,
) -> None:
    """Render INPUT (YAML or JSON, default stdin) as FORMAT."""
    settings: RenderSettings = ctx.obj["settings"]
    data = _read_data(input_file)
    if format_name == "csv":
        data = _csv_records(data)

    formatters = []
    if use_pretty:
        formatters.append(pretty())
    if indent_unit:
        formatters.append(indent(indent_unit))
    if line_prefix:
        formatters.append(prefix(line_prefix))
    if crlf:
        formatters.append(line_ending(CRLF))

    try:
        opts: list[Option] = [with_format(*formatters)]
        if sep is not None:
            opts.append(separator(sep))
        if show_options:
            opts.append(dump(click.get_text_stream("stderr")))

        renderer = settings.renderer(format_name, buffered=buffered or None)
        logger.debug(f"Rendering {format_name} with {type(renderer).__name__}")
        renderer.render(click.get_binary_stream("stdout"), data, *opts)
    except (RenderError, ContextError) as e:
        raise click.ClickException(str(e)) from e


@cli.command("template")
@click.argument("template_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("input_file", metavar="[INPUT]", type=click.File("r"), default="-")
@click.option("--name", "-n", "template_name", required=True, help="Template to render")
@click.option(
    "--mode",
    type=click.Choice(["html", "text"]),
    default=None,
    help="html escapes interpolated values; text renders verbatim (default from settings)",
)
@click.option("--ext", "extension", default=None, help="Template file extension, e.g. .html")
@click.option(
    "--fallback-dir",
    "fallback_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory searched when a template is missing from TEMPLATE_DIR (repeatable)",
)
@click.pass_context
def template_cmd(
    ctx: click.Context,
    template_dir: str,
    input_file: TextIO,
    template_name: str,
    mode: str | None,
    extension: str | None,
    fallback_dirs: tuple[str, ...],
) -> None:
    """Render template NAME from TEMPLATE_DIR with INPUT data."""
    settings: RenderSettings = ctx.obj["settings"]
    if mode is None:
        mode = "html" if settings.templates.html else "text"
    if extension is None:
        extension = settings.templates.extension

    data = _read_data(input_file)
    try:
        template_settings = TemplateSettings(directories=[template_dir, *fallback_dirs], extension=extension)
        loader = template_settings.loader()
        factory = html if mode == "html" else text
        renderer = factory(template_name, load(loader))
        renderer.render(click.get_binary_stream("stdout"), data)
    except (RenderError, ContextError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@cli.command("templates")
@click.argument("template_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--ext", "extension", default=None, help="Template file extension, e.g. .html")
@click.option("--pattern", default="", help="Glob pattern names must match")
@click.pass_context
def templates_cmd(ctx: click.Context, template_dir: str, extension: str | None, pattern: str) -> None:
    """List templates found in TEMPLATE_DIR."""
    settings: RenderSettings = ctx.obj["settings"]
    if extension is None:
        extension = settings.templates.extension

    try:
        loader = FSLoader(LoaderConfig(root=template_dir, extension=extension))
        names = loader.load(pattern)
    except (RenderError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if not names:
        click.echo("No templates found.")
        return
    for name in names:
        click.echo(name)
