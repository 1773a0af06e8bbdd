"""CLI entry point for orgsift."""

import re
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from org_outline.parser import OrgOutline
from org_outline.unwrap import unwrap_text
from orgsift.config import load_config
from orgsift.models.config import SUPPORTED_FORMATS, Config, ParseOptions
from orgsift.services.exceptions import OrgsiftError
from orgsift.services.file_operations import atomic_write, read_text_file
from orgsift.services.filters import apply_filters
from orgsift.services.serializers import headline_to_record, output_path_for, serialize
from orgsift.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()


def compile_pattern(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[re.Pattern]:
    """Click callback turning a regex option into a compiled pattern."""
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise click.BadParameter(f"Invalid regular expression {value!r}: {e}")


def report(message: str) -> None:
    """Print a green status line. Paths are printed verbatim, without markup or wrapping."""
    console.print(message, style="green", markup=False, highlight=False, soft_wrap=True)


def run_parse(text: str, options: ParseOptions) -> list[dict]:
    """
    Parse an Org document, filter its headlines and build output records.

    Args:
        text: Org document
        options: Resolved parse options

    Returns:
        List of serializable headline records
    """
    outline = OrgOutline.parse(text, options.render_mode)
    logger.debug("outline_parsed", headlines=len(outline.headlines))

    headlines = apply_filters(outline.headlines, options)
    logger.info(
        "headlines_filtered",
        total=len(outline.headlines),
        kept=len(headlines),
    )

    return [
        headline_to_record(h, options.render_mode, options.include_level)
        for h in headlines
    ]


@click.group()
@click.version_option(version="0.1.0", prog_name="orgsift")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.config/orgsift/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """orgsift: Extract headlines from Org files and unwrap hard-wrapped text."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    configure_logging(config.logging.level, config.logging.file)
    logger.info("config_loaded", path=str(config_path) if config_path else None)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.argument("org_file", type=click.Path(path_type=Path))
@click.option("-m", "--max-level", type=click.IntRange(min=1), help="Show headlines with level <= LEVEL")
@click.option("-n", "--min-level", type=click.IntRange(min=1), help="Show headlines with level >= LEVEL")
@click.option("-c", "--custom-id", callback=compile_pattern, help="Show headlines with CUSTOM_ID property matching regex")
@click.option(
    "-C", "--section-custom-id",
    callback=compile_pattern,
    help="Show headlines below sections whose CUSTOM_ID property matches regex (not the section itself)",
)
@click.option("-T", "--title", callback=compile_pattern, help="Show headlines whose title matches regex")
@click.option(
    "-t", "--section-title",
    callback=compile_pattern,
    help="Show headlines below sections whose title matches regex (not the section itself)",
)
@click.option("-H", "--html", is_flag=True, help="Convert content to HTML")
@click.option("-M", "--markdown", is_flag=True, help="Convert content to Markdown")
@click.option("-l", "--include-level", is_flag=True, help="Include headline levels")
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False),
    default=None,
    help="Output format: json or yaml (default: from config, else json)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: input file with the format as suffix)",
)
@click.pass_context
def parse(
    ctx: click.Context,
    org_file: Path,
    max_level: Optional[int],
    min_level: Optional[int],
    custom_id: Optional[re.Pattern],
    section_custom_id: Optional[re.Pattern],
    title: Optional[re.Pattern],
    section_title: Optional[re.Pattern],
    html: bool,
    markdown: bool,
    include_level: bool,
    output_format: Optional[str],
    output: Optional[Path],
):
    """
    Parse an Org file into headline records.

    Examples:
        orgsift parse notes.org                      # All headlines, JSON
        orgsift parse -m 2 notes.org                 # Headlines with level <= 2
        orgsift parse -m 3 -n 2 notes.org            # Headlines with 2 <= level <= 3
        orgsift parse -c "section[0-9]+" notes.org   # CUSTOM_ID matching regex
        orgsift parse -t "^(Tasks|Projects)$" notes.org
        orgsift parse -C "chapter\\d+" notes.org     # Within sections by CUSTOM_ID
        orgsift parse -H notes.org                   # Convert content to HTML
        orgsift parse -M -f yaml notes.org           # Markdown content, YAML output
    """
    config: Config = ctx.obj["config"]

    # Flags win over config; config render mode applies only without flags
    if not html and not markdown:
        html = config.render.mode.value == "html"
        markdown = config.render.mode.value == "markdown"

    try:
        options = ParseOptions.from_flags(
            html=html,
            markdown=markdown,
            min_level=min_level,
            max_level=max_level,
            title_pattern=title,
            custom_id_pattern=custom_id,
            section_title_pattern=section_title,
            section_custom_id_pattern=section_custom_id,
            include_level=include_level or config.output.include_level,
            output_format=output_format or config.output.format,
        )
    except OrgsiftError as e:
        logger.error("parse_options_invalid", error=str(e))
        raise click.ClickException(str(e))

    if options.min_level and options.max_level and options.min_level > options.max_level:
        logger.warning("empty_level_range", min_level=options.min_level, max_level=options.max_level)

    logger.info(
        "parse_started",
        path=str(org_file),
        render_mode=options.render_mode.value,
        output_format=options.output_format,
    )

    try:
        text = read_text_file(org_file)
    except OrgsiftError as e:
        raise click.ClickException(str(e))

    records = run_parse(text, options)
    output_path = output or output_path_for(org_file, options.output_format)

    try:
        atomic_write(output_path, serialize(records, options.output_format))
    except OSError as e:
        raise click.ClickException(f"Could not write {output_path}: {e}")

    logger.info("output_written", path=str(output_path), records=len(records))
    report(f"{options.output_format.upper()} output written to {output_path}")


@cli.command()
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.option("-i", "--input", "input_path", type=click.Path(path_type=Path), help="Input file path")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (defaults to stdout if not provided)",
)
@click.pass_context
def unwrap(ctx: click.Context, file: Optional[Path], input_path: Optional[Path], output: Optional[Path]):
    """
    Unwrap paragraphs and list items in an Org file.

    Examples:
        orgsift unwrap notes.org                     # Print result to stdout
        orgsift unwrap -i notes.org -o unwrapped.org
    """
    source = input_path or file
    if source is None:
        click.echo(ctx.get_help())
        return

    logger.info("unwrap_started", path=str(source))

    try:
        text = read_text_file(source)
    except OrgsiftError as e:
        raise click.ClickException(str(e))

    result = unwrap_text(text)

    if output is None:
        click.echo(result, nl=not result.endswith("\n"))
        return

    try:
        atomic_write(output, result)
    except OSError as e:
        raise click.ClickException(f"Could not write {output}: {e}")

    logger.info("unwrap_written", path=str(output))
    report(f"Processed file saved to: {output}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
