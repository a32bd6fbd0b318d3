"""Command-line interface for wordshield."""

import json
import sys
import logging
from pathlib import Path
from typing import Optional

import click
import yaml

from wordshield import __version__
from wordshield.engine import SensitiveWordFilter
from wordshield.dictionary import load_dictionary


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _read_text(text: Optional[str], file: Optional[Path]) -> str:
    """Return --text or the contents of --file, exiting if neither is given."""
    if text is None and file is None:
        click.echo("Error: Must provide --text or --file", err=True)
        sys.exit(1)

    if file:
        text = file.read_text(encoding="utf-8")
    assert text is not None
    return text


def _create_filter(
    dictionaries: tuple[Path, ...],
    neglect: Optional[str],
    replacement: str,
    fold_case: bool,
) -> SensitiveWordFilter:
    """Load dictionaries and build a filter."""
    dictionary_paths = [str(p) for p in dictionaries] if dictionaries else None

    try:
        dictionary = load_dictionary(paths=dictionary_paths)
        word_filter = SensitiveWordFilter.from_dictionary(
            dictionary, fold_case=fold_case, replacement=replacement
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    if neglect:
        word_filter.set_neglect_words(neglect)
    return word_filter


dictionary_option = click.option(
    "--dict",
    "-d",
    "dictionaries",
    type=click.Path(exists=True, path_type=Path),
    multiple=True,
    help="Dictionary files to load (uses the bundled default if not specified)",
)
neglect_option = click.option(
    "--neglect",
    "-n",
    help="Characters to skip while matching, e.g. ' &-'",
)
fold_case_option = click.option(
    "--fold-case",
    is_flag=True,
    help="Upper-case dictionary words so lower-case entries match",
)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """wordshield: Detect and redact sensitive words."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@main.command(name="filter")
@click.option(
    "--text",
    "-t",
    help="Text to filter (use --file for file input)",
)
@click.option(
    "--file",
    "-f",
    type=click.Path(exists=True, path_type=Path),
    help="File to filter",
)
@dictionary_option
@neglect_option
@fold_case_option
@click.option(
    "--replacement",
    "-r",
    default="*",
    help="Character written over matched positions",
)
@click.option(
    "--no-redact",
    is_flag=True,
    help="Only report matches, leave the text unchanged",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format",
)
@click.option(
    "--stats",
    is_flag=True,
    help="Print match statistics",
)
@click.pass_context
def filter_text(
    ctx: click.Context,
    text: Optional[str],
    file: Optional[Path],
    dictionaries: tuple[Path, ...],
    neglect: Optional[str],
    fold_case: bool,
    replacement: str,
    no_redact: bool,
    output: str,
    stats: bool,
) -> None:
    """Redact sensitive words in text or file."""
    text = _read_text(text, file)
    word_filter = _create_filter(dictionaries, neglect, replacement, fold_case)
    result = word_filter.filter(text, redact=not no_redact)

    if output == "json":
        click.echo(
            json.dumps(
                {
                    "text": result.text,
                    "all_clear": result.all_clear,
                    "match_count": result.match_count,
                    "matches": [
                        {"keyword": m.keyword, "span": list(m.span), "indices": list(m.indices)}
                        for m in result.matches
                    ],
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    click.echo(result.text)
    if stats:
        click.echo(f"\n[Matched {result.match_count} words]", err=True)
        for match in result.matches:
            start, end = match.span
            click.echo(f"  {match.keyword} at {start}-{end}", err=True)


@main.command()
@click.option(
    "--text",
    "-t",
    help="Text to check (use --file for file input)",
)
@click.option(
    "--file",
    "-f",
    type=click.Path(exists=True, path_type=Path),
    help="File to check",
)
@dictionary_option
@neglect_option
@fold_case_option
@click.pass_context
def check(
    ctx: click.Context,
    text: Optional[str],
    file: Optional[Path],
    dictionaries: tuple[Path, ...],
    neglect: Optional[str],
    fold_case: bool,
) -> None:
    """Check whether text is free of sensitive words."""
    text = _read_text(text, file)
    word_filter = _create_filter(dictionaries, neglect, "*", fold_case)

    if word_filter.every(text):
        click.echo("✓ Clean")
        sys.exit(0)
    else:
        click.echo("✗ Sensitive words found")
        sys.exit(1)


@main.command()
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to listen on [default: 8080]",
)
@click.option(
    "--host",
    "-h",
    default=None,
    help="Host to bind to [default: 0.0.0.0]",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file",
)
@click.pass_context
def serve(
    ctx: click.Context,
    port: Optional[int],
    host: Optional[str],
    config: Optional[Path],
) -> None:
    """Start HTTP server."""
    try:
        import uvicorn
        from wordshield.server import create_app
    except ImportError:
        click.echo(
            "Error: Server dependencies not installed. Install with: pip install wordshield[server]",
            err=True,
        )
        sys.exit(1)

    # Load config
    config_data = {}
    if config:
        with open(config, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    # CLI options override the config file
    server_config = config_data.get("server", {})
    if port is None:
        port = server_config.get("port", 8080)
    if host is None:
        host = server_config.get("host", "0.0.0.0")

    click.echo(f"Starting server on {host}:{port}")

    app = create_app(config_data)

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info" if ctx.obj.get("verbose") else "warning",
    )


@main.command()
@dictionary_option
def list_words(dictionaries: tuple[Path, ...]) -> None:
    """List dictionary words by namespace."""
    dictionary_paths = [str(p) for p in dictionaries] if dictionaries else None
    try:
        dictionary = load_dictionary(paths=dictionary_paths)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    click.echo(f"Loaded {len(dictionary)} words from {len(dictionary.namespaces)} namespaces\n")

    for namespace in sorted(dictionary.namespaces.keys()):
        click.echo(f"Namespace: {namespace}")
        for word in dictionary.get_namespace_words(namespace):
            click.echo(f"  {word}")
        click.echo()

    if dictionary.neglect_words:
        click.echo(f"Neglect words: {dictionary.neglect_words!r}")


if __name__ == "__main__":
    main()
