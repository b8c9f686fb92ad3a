"""CLI commands for halkit."""

from __future__ import annotations

import logging
import sys

import click
from pydantic import ValidationError

from halkit.cli.output import links_table, print_table, state_table
from halkit.client import HateoasClient
from halkit.config import HalKitConfig, load_config
from halkit.errors import HalKitError, format_error
from halkit.hal.parser import get_action_rels, parse_template_link
from halkit.hal.types import Resource
from halkit.state import derive_state


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fetch(ctx: click.Context, url: str) -> Resource:
    config: HalKitConfig = ctx.obj["config"]
    try:
        with HateoasClient.from_config(config) as client:
            return client.fetch(url)
    except HalKitError as e:
        click.echo(f"Error: {format_error(e)}", err=True)
        if ctx.obj["verbose"]:
            click.echo(e.format_verbose(), err=True)
        sys.exit(2)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--base-url", help="Base URL for relative hrefs (overrides config)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None, base_url: str | None) -> None:
    """halkit - inspect and drive HAL hypermedia APIs."""
    ctx.ensure_object(dict)

    config_obj = load_config(config)
    if verbose:
        config_obj.verbose = True
    if base_url:
        try:
            config_obj = HalKitConfig.model_validate(
                {**config_obj.model_dump(), "api_url": base_url, "prod_api_url": None}
            )
        except ValidationError as e:
            raise click.BadParameter(e.errors()[0]["msg"], param_hint="--base-url") from e

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    setup_logging(verbose)


@cli.command()
@click.argument("url")
@click.pass_context
def links(ctx: click.Context, url: str) -> None:
    """Show every link of the resource at URL."""
    print_table(links_table(_fetch(ctx, url)))


@cli.command()
@click.argument("url")
@click.pass_context
def actions(ctx: click.Context, url: str) -> None:
    """List the action rels the resource at URL currently offers."""
    rels = get_action_rels(_fetch(ctx, url))
    if not rels:
        click.echo("No actions available")
        return
    for rel in rels:
        click.echo(rel)


@cli.command()
@click.argument("template")
@click.argument("variables", nargs=-1)
def expand(template: str, variables: tuple[str, ...]) -> None:
    """Expand a URI TEMPLATE with name=value VARIABLES."""
    values: dict[str, str] = {}
    for item in variables:
        name, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected name=value, got {item!r}", param_hint="VARIABLES")
        values[name] = value

    try:
        click.echo(parse_template_link({"href": template, "templated": True}, values))
    except HalKitError as e:
        click.echo(f"Error: {format_error(e)}", err=True)
        sys.exit(2)


@cli.command()
@click.argument("url")
@click.pass_context
def check(ctx: click.Context, url: str) -> None:
    """Check the resource's links against the post lifecycle table."""
    view = derive_state(_fetch(ctx, url))
    print_table(state_table(view))

    if view.is_consistent:
        click.echo("Consistent")
    else:
        click.echo(f"Inconsistent: missing {', '.join(view.missing_actions) or 'status'}", err=True)
        sys.exit(1)
