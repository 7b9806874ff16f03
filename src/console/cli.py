"""Command-line interface for the fleet dashboard client."""

import json
import logging
import sys
from dataclasses import asdict

import click
import requests

from src.api.client import ApiClient
from src.api.errors import ApiError, AuthenticationRequired
from src.api.loader import load_dashboard
from src.api.resources import ResourceEndpoint
from src.config.constants import API_BASE_URL, REQUEST_TIMEOUT_SECONDS, RESOURCE_PATHS
from src.config.schema import AggregationPolicy, ApiSettings, OnTimePolicy
from src.fleet.transitions import REGISTRY
from src.web.dashboard_server import run_server

logger = logging.getLogger(__name__)

KIND_CHOICE = click.Choice(sorted(RESOURCE_PATHS), case_sensitive=False)
STATUS_KIND_CHOICE = click.Choice(sorted(REGISTRY.kinds), case_sensitive=False)


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _run(ctx: click.Context, action):
    """Run an API action, turning client failures into a non-zero exit."""
    try:
        return action()
    except AuthenticationRequired:
        click.echo("Authentication required: set --token / FLEET_API_TOKEN and retry.", err=True)
        ctx.exit(2)
    except ApiError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
    except requests.RequestException as exc:
        click.echo(f"Fleet API unreachable: {exc}", err=True)
        ctx.exit(1)


@click.group()
@click.option("--base-url", envvar="FLEET_API_URL", default=API_BASE_URL, show_default=True,
              help="Fleet API base URL.")
@click.option("--token", envvar="FLEET_API_TOKEN", default=None, help="Bearer token.")
@click.option("--timeout", envvar="FLEET_API_TIMEOUT", default=REQUEST_TIMEOUT_SECONDS,
              type=float, show_default=True, help="Request timeout in seconds.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def main(ctx, base_url, token, timeout, verbose):
    """Fleet logistics dashboard client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    settings = ApiSettings(base_url=base_url, timeout_seconds=timeout)
    ctx.obj = {"settings": settings, "client": ApiClient(settings, token=token)}


@main.command()
@click.option("--on-time", type=click.Choice([p.value for p in OnTimePolicy]),
              default=OnTimePolicy.COMPLETED_ONLY.value, show_default=True,
              help="Which finished trips count towards the on-time rate.")
@click.pass_context
def summary(ctx, on_time):
    """Fetch trips, trucks, incidents, logs and drivers, print dashboard metrics."""
    policy = AggregationPolicy(on_time=OnTimePolicy(on_time))
    report = _run(ctx, lambda: load_dashboard(ctx.obj["client"], policy))
    if report.error is not None:
        logger.warning(report.error.message)
    _echo_json(report.to_dict())


@main.command()
@click.argument("kind", type=STATUS_KIND_CHOICE)
@click.argument("status")
def transitions(kind, status):
    """List the moves offered from STATUS for an entity KIND."""
    options = REGISTRY.transitions_for(kind, status)
    if not options:
        click.echo(f"No transitions from {status} ({kind}).")
        return
    for option in options:
        click.echo(f"{option.target}\t{option.label}")


@main.command(name="list")
@click.argument("kind", type=KIND_CHOICE)
@click.option("--limit", default=None, type=int, help="Page size.")
@click.option("--offset", default=0, type=int, help="Page offset.")
@click.pass_context
def list_entities(ctx, kind, limit, offset):
    """Print one page of KIND."""
    page = _run(ctx, lambda: ResourceEndpoint(ctx.obj["client"], kind.lower()).list(limit, offset))
    _echo_json({
        "items": [asdict(item) for item in page.items],
        "total": page.total,
        "limit": page.limit,
        "offset": page.offset,
    })


@main.command()
@click.argument("kind", type=KIND_CHOICE)
@click.argument("entity_id")
@click.pass_context
def show(ctx, kind, entity_id):
    """Print a single entity."""
    entity = _run(ctx, lambda: ResourceEndpoint(ctx.obj["client"], kind.lower()).get(entity_id))
    _echo_json(asdict(entity))


@main.command()
@click.argument("kind", type=STATUS_KIND_CHOICE)
@click.argument("entity_id")
@click.argument("target")
@click.pass_context
def transition(ctx, kind, entity_id, target):
    """Ask the fleet API to move an entity to TARGET."""
    endpoint = ResourceEndpoint(ctx.obj["client"], kind.lower())
    try:
        updated = _run(ctx, lambda: endpoint.transition(entity_id, target.upper()))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TARGET")
    _echo_json(asdict(updated))


@main.command()
@click.option("--host", default="127.0.0.1", help="Host to bind.")
@click.option("--port", default=8787, type=int, help="Port to bind.")
@click.pass_context
def serve(ctx, host, port):
    """Run the dashboard JSON API."""
    run_server(host=host, port=port, settings=ctx.obj["settings"])


if __name__ == "__main__":
    main()
