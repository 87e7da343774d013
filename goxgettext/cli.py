"""CLI interface for go-xgettext.

Extracts translatable strings from Go sources into a .pot template.
"""

import sys

import click
from dotenv import load_dotenv

# Load .env before options are parsed so GO_XGETTEXT_* env vars apply
load_dotenv()

from goxgettext import __version__  # noqa: E402
from goxgettext.extract import extract_files  # noqa: E402
from goxgettext.logging import set_verbosity  # noqa: E402
from goxgettext.models.keywords import (  # noqa: E402
    DEFAULT_KEYWORD,
    DEFAULT_KEYWORD_CONTEXTUAL,
    DEFAULT_KEYWORD_PLURAL,
    ConfigurationError,
    KeywordTable,
    load_keyword_config,
)
from goxgettext.parser.base import SourceParseError  # noqa: E402
from goxgettext.pot import DEFAULT_BUGS_ADDRESS, CatalogWriteError, WriterOptions, write_pot  # noqa: E402


def _build_keywords(
    keyword: str,
    keyword_plural: str,
    keyword_contextual: str,
    skip_args: int,
    keyword_cfg: str | None,
) -> KeywordTable:
    if keyword_cfg:
        return load_keyword_config(keyword_cfg)
    return KeywordTable.from_names(keyword, keyword_plural, keyword_contextual, skip_args)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="go-xgettext")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output to specified file.")
@click.option(
    "--add-comments",
    is_flag=True,
    help="Place all comment blocks preceding keyword lines in output file.",
)
@click.option(
    "--add-comments-tag",
    default="",
    metavar="TAG",
    help="Place comment blocks starting with TAG and preceding keyword lines in output file.",
)
@click.option("--sort-output", is_flag=True, help="Generate sorted output.")
@click.option("--no-location", is_flag=True, help="Do not write '#: filename:line' lines.")
@click.option(
    "--msgid-bugs-address",
    default=DEFAULT_BUGS_ADDRESS,
    envvar="GO_XGETTEXT_MSGID_BUGS_ADDRESS",
    show_default=True,
    help="Set report address for msgid bugs.",
)
@click.option(
    "--package-name",
    default="",
    envvar="GO_XGETTEXT_PACKAGE_NAME",
    help="Set package name in output.",
)
@click.option(
    "--keyword",
    default=DEFAULT_KEYWORD,
    show_default=True,
    metavar="WORD",
    help="Look for WORD as the keyword for singular strings.",
)
@click.option(
    "--keyword-plural",
    default=DEFAULT_KEYWORD_PLURAL,
    show_default=True,
    metavar="WORD",
    help="Look for WORD as the keyword for plural strings.",
)
@click.option(
    "--keyword-contextual",
    default=DEFAULT_KEYWORD_CONTEXTUAL,
    show_default=True,
    metavar="WORD",
    help="Look for WORD as the keyword for contextual strings.",
)
@click.option(
    "--skip-args",
    type=click.IntRange(min=0),
    default=0,
    help="Number of arguments to skip in gettext function call before considering a text message argument.",
)
@click.option(
    "--keyword-cfg",
    type=click.Path(dir_okay=False),
    envvar="GO_XGETTEXT_KEYWORD_CFG",
    help="Path to keywords configuration file in JSON format. When given --keyword* and --skip-args are ignored.",
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=1,
    envvar="GO_XGETTEXT_JOBS",
    help="Parse files in N worker processes (default: 1).",
)
@click.option("-v", "--verbose", count=True, help="Log debug details to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    output: str | None,
    add_comments: bool,
    add_comments_tag: str,
    sort_output: bool,
    no_location: bool,
    msgid_bugs_address: str,
    package_name: str,
    keyword: str,
    keyword_plural: str,
    keyword_contextual: str,
    skip_args: int,
    keyword_cfg: str | None,
    jobs: int,
    verbose: int,
) -> None:
    """Extract translatable strings from Go FILES into a .pot template."""
    if not files:
        click.echo("Usage: go-xgettext [options] file1 ...")
        click.echo(ctx.get_help())
        ctx.exit(0)

    set_verbosity(verbose)

    try:
        keywords = _build_keywords(keyword, keyword_plural, keyword_contextual, skip_args, keyword_cfg)
    except ConfigurationError as e:
        click.echo(f"Keyword configuration failed: {e}", err=True)
        sys.exit(1)

    try:
        catalog = extract_files(list(files), keywords, comments_tag=add_comments_tag, workers=jobs)
    except SourceParseError as e:
        click.echo(f"Extraction failed: {e}", err=True)
        sys.exit(1)

    options = WriterOptions(
        package_name=package_name,
        bugs_address=msgid_bugs_address,
        sort_output=sort_output,
        no_location=no_location,
        add_comments=add_comments,
        add_comments_tag=add_comments_tag,
    )

    try:
        if output:
            try:
                out = open(output, "w", encoding="utf-8")
            except OSError as e:
                raise CatalogWriteError(f"Failed to create {output}: {e}") from e
            with out:
                write_pot(catalog, out, options)
        else:
            write_pot(catalog, sys.stdout, options)
    except CatalogWriteError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
