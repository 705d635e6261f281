"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import click
from dotenv import load_dotenv

from CrossrefQuery.cli.runner import CommandRunner
from CrossrefQuery.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from CrossrefQuery.core.dates import format_date_field, normalize_date_parts


@click.group(help="CrossrefQuery: compose Crossref REST API queries and normalize dates.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (missing file means built-in defaults).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before any config is read.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()
    ctx.obj = config_path


def query_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options that override the config `query` section."""
    options = [
        click.option("--resource", help="Resource kind: works, funders, members, prefixes, types, journals."),
        click.option("--identifier", help="Parent identifier; addresses /<resource>/<identifier>/works."),
        click.option("-q", "--query", "topics", multiple=True, help="Free-text topic (repeatable)."),
        click.option("--field", "fields", multiple=True, metavar="NAME=TEXT", help="Field query, e.g. author=Ray."),
        click.option("-f", "--filter", "filters", multiple=True, metavar="KEY[:VALUE]", help="Filter (repeatable)."),
        click.option("--facet", "facets", multiple=True, metavar="NAME[:COUNT]", help="Facet count (repeatable)."),
        click.option("--sort", help="Sort field, e.g. published."),
        click.option("--order", help="Sort order: asc or desc."),
        click.option("--rows", type=click.IntRange(min=0), help="Number of rows."),
        click.option("--offset", type=click.IntRange(min=0), help="Result offset."),
        click.option("--sample", is_flag=True, default=False, help="Random sample (excludes rows/offset)."),
        click.option("--cursor", help="Deep-paging cursor, '*' to start."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_query_overrides(
    *,
    resource: str | None = None,
    identifier: str | None = None,
    topics: tuple[str, ...] = (),
    fields: tuple[str, ...] = (),
    filters: tuple[str, ...] = (),
    facets: tuple[str, ...] = (),
    sort: str | None = None,
    order: str | None = None,
    rows: int | None = None,
    offset: int | None = None,
    sample: bool = False,
    cursor: str | None = None,
) -> dict[str, Any]:
    """Turn CLI options into a config override mapping.

    Only options that were given appear in the result. List options replace
    the configured lists; `--field` entries are added to configured fields.
    """
    query: dict[str, Any] = {}
    if resource is not None:
        query["resource"] = resource
    if identifier is not None:
        query["identifier"] = identifier
    if topics:
        query["topics"] = list(topics)
    if fields:
        query["fields"] = dict(_split_field(item) for item in fields)
    if filters:
        query["filters"] = list(filters)
    if facets:
        query["facets"] = list(facets)
    if sort is not None:
        query["sort"] = sort
    if order is not None:
        query["order"] = order
    # Pagination given on the command line replaces the configured mode.
    if sample:
        query.update(sample=True, rows=None, offset=None)
    elif rows is not None or offset is not None:
        query.update(sample=False, rows=rows, offset=offset)
    if cursor is not None:
        query["cursor"] = cursor
    return {"query": query} if query else {}


def _split_field(item: str) -> tuple[str, str]:
    name, sep, text = item.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=TEXT, got {item!r}", param_hint="--field")
    return name.strip(), text


def _load(ctx: click.Context, options: dict[str, Any]) -> AppConfig:
    try:
        return load_config(ctx.obj, overrides=build_query_overrides(**options))
    except (TypeError, ValueError) as error:
        raise click.ClickException(str(error)) from error


@cli.command("url")
@query_options
@click.pass_context
def url_cmd(ctx: click.Context, **options: Any) -> None:
    """Print the composed request URL."""
    runner = CommandRunner(_load(ctx, options))
    click.echo(runner.run_url(action=ctx.command.name))


@cli.command("fetch")
@query_options
@click.pass_context
def fetch_cmd(ctx: click.Context, **options: Any) -> None:
    """Fetch one page of works and log DOI, issued date and title.

    Raises:
        click.Abort: When the fetch fails.
    """
    runner = CommandRunner(_load(ctx, options))
    runner.run_fetch(action=ctx.command.name)


@cli.command("dates")
@click.argument("raw")
def dates_cmd(raw: str) -> None:
    """Normalize a JSON date-parts value, e.g. '[[2017,10,11]]'.

    A full date object ('{"date-parts": [[2020]]}') is accepted too.
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as error:
        raise click.BadParameter(f"not valid JSON: {error}", param_hint="RAW") from error
    if isinstance(value, dict):
        value = value.get("date-parts")
    click.echo(format_date_field(normalize_date_parts(value)))
