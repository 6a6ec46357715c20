"""Command-line interface for bibfield.

Provides CLI commands for sorting record files and cleaning links.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibfield")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="bibfield")
def cli() -> None:
    """Field-aware sorting and link cleaning for bibliographic records.

    Use 'bibfield COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--by",
    "sort_spec",
    type=str,
    default="author",
    show_default=True,
    help="Comma-separated fields; prefix a field with - to reverse it (e.g. -year,author)",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def sort(
    input_path: str,
    output: str,
    sort_spec: str,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Sort a JSONL record file by one or more fields.

    Author and editor fields sort by last name, years sort most recent
    first and months in calendar order. Use ENTRYTYPE to sort by entry type.

    Examples
    --------
        bibfield sort refs.jsonl -o sorted.jsonl --by year,author
        bibfield sort refs.jsonl -o sorted.jsonl --by entrytype,title --log events.jsonl
    """
    from bibfield.api import sort_file

    if verbose:
        click.echo(f"Sorting {input_path} by {sort_spec}", err=True)

    try:
        count = sort_file(input_path, output, sort_spec, audit_log=log_path)
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ Successfully wrote {count} records to {output}", fg="green")


@cli.command(name="clean-links")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--field",
    "fields",
    multiple=True,
    default=("url",),
    show_default=True,
    help="Field holding a link (repeatable)",
)
@click.option(
    "--no-redirects",
    is_flag=True,
    help="Do not unwrap search-engine redirect links",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def clean_links(
    input_path: str,
    output: str,
    fields: tuple[str, ...],
    no_redirects: bool,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Clean link fields of a JSONL record file.

    Unwraps search-engine redirects, resolves DOIs to resolver URLs and
    re-encodes links as ASCII-safe URIs.

    Examples
    --------
        bibfield clean-links refs.jsonl -o clean.jsonl
        bibfield clean-links refs.jsonl -o clean.jsonl --field url --field pdf
    """
    from bibfield.api import clean_links_file
    from bibfield.config import LinkConfig

    if verbose:
        click.echo(f"Cleaning fields {', '.join(fields)} in {input_path}", err=True)

    try:
        config = LinkConfig(
            fields=list(fields),
            clean_redirects=not no_redirects,
            audit_log=Path(log_path) if log_path else None,
        )
        count = clean_links_file(input_path, output, config)
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ Successfully wrote {count} records to {output}", fg="green")


@cli.command(name="sanitize-url")
@click.argument("links", nargs=-1, required=True)
@click.option(
    "--no-redirects",
    is_flag=True,
    help="Do not unwrap search-engine redirect links",
)
def sanitize_url_command(links: tuple[str, ...], no_redirects: bool) -> None:
    """Print sanitized forms of LINKS, one per line.

    Examples
    --------
        bibfield sanitize-url doi:10.1000/xyz
        bibfield sanitize-url '\\url{http://example.com/a b}'
    """
    from bibfield.links import clean_search_redirect, sanitize_url

    for link in links:
        if not no_redirects:
            link = clean_search_redirect(link)
        click.echo(sanitize_url(link))


if __name__ == "__main__":
    cli()
