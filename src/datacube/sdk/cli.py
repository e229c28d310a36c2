"""
datacube CLI: browse the flow catalog, resolve names, run flows.

Commands
--------
- list              : print catalog flows (id, kind, path)
- help              : print the SDK help listing
- resolve           : print the flow id a name resolves to
- run               : resolve a flow and execute it
- status / usage / me / execution-status : native API endpoints

Global options
--------------
--format {plain,rich,json}  Select output format (default: plain)
--catalog PATH              JSON catalog file (default: built-in demo catalog)
--api-key KEY               API key (default: $DATACUBE_API_KEY)
--base-url URL              API base URL (default: $DATACUBE_API_URL)

Exit codes
----------
0 = success
1 = runtime, configuration or transport error
2 = unknown flow
"""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Annotated, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
import typer

from datacube.sdk.api import invoke
from datacube.sdk.client import DataCubeClient
from datacube.sdk.config import load_catalog_file
from datacube.sdk.demos.demo_catalog import demo_flows
from datacube.sdk.errors import DataCubeError
from datacube.sdk.help_text import flow_path, help_entries, render_help
from datacube.sdk.registry import FlowCatalog
from datacube.sdk.resolver import Resolver
from datacube.sdk.spec import (
    Found,
    ProviderScope,
    Scope,
    TeamScope,
)
from datacube.sdk.types import CatalogSource, OutputFormat

app = typer.Typer(help="datacube — DataCube API client (flow catalog and execution)")

ProviderOpt = Annotated[
    str | None,
    typer.Option("--provider", "-P", help="Resolve inside this provider."),
]
TeamOpt = Annotated[
    str | None,
    typer.Option("--team", "-T", help="Resolve inside this team."),
]


def _parse_params(param_kv: list[str]) -> dict[str, str]:
    """
    Parse repeated --param k=v options into a dict (last write wins).
    """
    out: dict[str, str] = {}
    for raw in param_kv:
        if "=" not in raw:
            raise ValueError(f"--param requires k=v, got: {raw!r}")
        k, v = raw.split("=", 1)
        k = k.strip()
        if not k:
            raise ValueError(f"Empty key in --param {raw!r}")
        out[k] = v
    return out


def _scope(provider: str | None, team: str | None) -> Scope:
    if provider and team:
        typer.echo("Pass either --provider or --team, not both", err=True)
        raise typer.Exit(code=1)
    if team:
        return TeamScope(team)
    if provider:
        return ProviderScope(provider)
    return None


def _catalog_source(ctx: typer.Context) -> CatalogSource:
    path: Path | None = ctx.obj["catalog"]
    if path is None:
        return demo_flows
    return lambda: load_catalog_file(path)


def _client(ctx: typer.Context) -> DataCubeClient:
    return DataCubeClient(
        ctx.obj["api_key"],
        base_url=ctx.obj["base_url"],
        catalog_source=_catalog_source(ctx),
    )


def _loaded(catalog: FlowCatalog) -> FlowCatalog:
    # unusable catalog -> exit 1
    try:
        catalog.all_flows()
    except DataCubeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)  # noqa: B904
    return catalog


def _emit(ctx: typer.Context, result: Any) -> None:
    fmt: OutputFormat = ctx.obj["format"]
    if fmt == "rich":
        Console().print_json(data=result)
        return
    typer.echo(json.dumps(result, separators=(",", ":")))


@app.callback()
def _main_options(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            case_sensitive=False,
            help="Output format: plain, rich, or json (default: plain).",
        ),
    ] = "plain",
    catalog: Annotated[
        Path | None,
        typer.Option(
            "--catalog",
            "-c",
            help="JSON file with the flow catalog (default: demo catalog).",
        ),
    ] = None,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="API key (default: $DATACUBE_API_KEY)."),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="API base URL (default: $DATACUBE_API_URL)."),
    ] = None,
) -> None:
    """
    Capture global CLI options and stash in the Typer context.
    """
    ctx.obj = {
        "format": format,
        "catalog": catalog,
        "api_key": api_key,
        "base_url": base_url,
    }


@app.command("list")
def list_flows(ctx: typer.Context) -> None:
    """
    List catalog flows.
    """
    fmt: OutputFormat = ctx.obj["format"]
    flows = _loaded(FlowCatalog(_catalog_source(ctx))).all_flows()

    if fmt == "json":
        rows = [
            {"id": f.id, "kind": f.kind.value, "path": flow_path(f)} for f in flows
        ]
        typer.echo(json.dumps({"flows": rows}, separators=(",", ":")))
        return

    if fmt == "rich":
        console = Console()
        table = Table(title="Catalog Flows")
        table.add_column("Flow", style="bold")
        table.add_column("Kind")
        table.add_column("Path")
        for f in flows:
            table.add_row(f.id, f.kind.value, flow_path(f) or "")
        console.print(table)
        return

    # plain
    for f in flows:
        typer.echo(f"{f.id}\t{f.kind.value}\t{flow_path(f) or ''}")


@app.command("help")
def show_help(ctx: typer.Context) -> None:
    """
    Print the SDK help listing (native methods and flow paths).
    """
    fmt: OutputFormat = ctx.obj["format"]
    catalog = _loaded(FlowCatalog(_catalog_source(ctx)))

    if fmt == "json":
        typer.echo(json.dumps({"flows": help_entries(catalog)}, separators=(",", ":")))
        return

    text = render_help(catalog)
    if fmt == "rich":
        panel = Panel.fit(Text(text), title="DataCube SDK", border_style="cyan")
        Console().print(panel)
        return

    # plain
    typer.echo(text)


@app.command("resolve")
def resolve_name(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Flow label or id")],
    provider: ProviderOpt = None,
    team: TeamOpt = None,
) -> None:
    """
    Print the id of the flow NAME resolves to (exit 2 if none).
    """
    fmt: OutputFormat = ctx.obj["format"]
    resolver = Resolver(_loaded(FlowCatalog(_catalog_source(ctx))))
    outcome = resolver.resolve(_scope(provider, team), name)

    if not isinstance(outcome, Found):
        typer.echo(str(outcome.error()), err=True)
        raise typer.Exit(code=2)

    flow = outcome.flow
    if fmt == "json":
        row = {"id": flow.id, "name": flow.display_name, "kind": flow.kind.value}
        typer.echo(json.dumps(row, separators=(",", ":")))
        return
    typer.echo(flow.id)


@app.command("run")
def run(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Flow label or id")],
    provider: ProviderOpt = None,
    team: TeamOpt = None,
    param: Annotated[
        list[str] | None,
        typer.Option(
            "--param",
            "-p",
            help="Flow input in k=v form (repeatable; later overrides earlier).",
        ),
    ] = None,
    version: Annotated[
        str | None,
        typer.Option("--version", "-v", help="Flow version (default: latest)."),
    ] = None,
) -> None:
    """
    Resolve a flow and execute it through the API.

    Exit codes:
    - 0 on success
    - 1 on runtime, configuration or transport error
    - 2 if the flow is unknown
    """
    _scope(provider, team)  # rejects --provider with --team
    try:
        inputs = _parse_params(param or [])
        client = _client(ctx)
    except (ValueError, DataCubeError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)  # noqa: B904

    with client:
        _loaded(client.catalog)
        outcome = client.resolve(name, provider=provider, team=team)
        if not isinstance(outcome, Found):
            typer.echo(str(outcome.error()), err=True)
            raise typer.Exit(code=2)

        try:
            result = invoke(client.execute, outcome.flow, inputs, version)
        except DataCubeError as exc:
            typer.echo(f"Runtime error: {exc}", err=True)
            raise typer.Exit(code=1)  # noqa: B904

    _emit(ctx, result)


def _native(ctx: typer.Context, method: str, *args: str) -> None:
    try:
        with _client(ctx) as client:
            result = getattr(client, method)(*args)
    except DataCubeError as exc:
        typer.echo(f"Runtime error: {exc}", err=True)
        raise typer.Exit(code=1)  # noqa: B904
    _emit(ctx, result)


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show API status."""
    _native(ctx, "get_status")


@app.command("usage")
def usage(ctx: typer.Context) -> None:
    """Show account usage."""
    _native(ctx, "get_usage")


@app.command("me")
def me(ctx: typer.Context) -> None:
    """Show the account behind the API key."""
    _native(ctx, "me")


@app.command("execution-status")
def execution_status(
    ctx: typer.Context,
    execution_id: Annotated[str, typer.Argument(help="Execution id")],
) -> None:
    """Show the status of an asynchronous execution."""
    _native(ctx, "execution_status", execution_id)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point wrapper that returns an exit code (useful for script wiring/tests).
    """
    try:
        rv = app(args=argv, standalone_mode=False)
        return rv if isinstance(rv, int) else 0
    except typer.Exit as e:
        return e.exit_code
    except Exception as exc:  # Safety net
        typer.echo(f"Unexpected error: {exc}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
