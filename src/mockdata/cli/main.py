"""Main CLI entry point for the mock data service.

Provides the same generation options as the HTTP API from the command line.
"""

from pathlib import Path
from typing import Any
import json
import sys

import click
import yaml
from rich.console import Console
from rich.table import Table

from mockdata import __version__
from mockdata.config import Settings, get_settings
from mockdata.engine.models import DataResponse
from mockdata.engine.service import DataService
from mockdata.generators.presets import PresetType
from mockdata.log import configure_logging

console = Console(stderr=True)

PRESET_DESCRIPTIONS = {
    PresetType.USER: "User account with address and credentials",
    PresetType.COMPANY: "Company with industry, headcount and address",
    PresetType.PRODUCT: "Catalogue product with SKU and price",
    PresetType.ADDRESS: "Postal address",
    PresetType.PERSONAL: "Names, contact details and credentials",
    PresetType.BUSINESS: "Employer, job title and registration ids",
    PresetType.LOCATION: "Coordinates, place names and a route",
    PresetType.FINANCIAL: "Card, bank account and crypto address",
    PresetType.TECH: "Network identifiers, URL and UUID",
    PresetType.HEALTH: "Patient name, record number and diagnosis",
}


def _shaping_options(func: Any) -> Any:
    """Options shared by every generating command."""
    options = [
        click.option("--count", "-n", help="Number of records (clamped to the configured maximum)"),
        click.option("--seed", "-s", help="Seed for reproducible output"),
        click.option("--fields", help="Comma-separated dotted paths to keep"),
        click.option("--flatten", is_flag=True, help="Collapse nested objects into dotted keys"),
        click.option("--format", "-f", "output_format", type=click.Choice(["json", "csv"]), default="json", help="Output format"),
        click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)"),
        click.option("--pretty", is_flag=True, help="Pretty print JSON output"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _query(**params: Any) -> dict[str, str]:
    """Drop unset options so they read like absent query parameters."""
    query = {}
    for name, value in params.items():
        if value is None or value is False:
            continue
        query[name] = "true" if value is True else str(value)
    return query


def _load_map_file(path: str) -> str:
    """Read a map spec from a JSON or YAML file and return it as JSON text."""
    content = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() in (".yaml", ".yml"):
        return json.dumps(yaml.safe_load(content), default=str)
    return content


def _emit(response: DataResponse, output: str | None, pretty: bool) -> None:
    if response.is_error:
        body = response.body or {}
        console.print(f"[red]Error: {body.get('error')}[/red]")
        if body.get("detail"):
            console.print(f"[red]{body['detail']}[/red]")
        sys.exit(1)

    text = response.render(pretty=pretty)
    if output:
        Path(output).write_text(text)
        console.print(f"[green]Wrote {response.content_type} output to {output}[/green]")
    else:
        click.echo(text, nl=not text.endswith("\n"))


@click.group()
@click.version_option(version=__version__, prog_name="mockdata")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--max-count", type=int, help="Override the MAX_COUNT setting")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, max_count: int | None) -> None:
    """Mock Data - Generate fake users, companies and custom records.

    Output is JSON by default; use --format csv for tabular output.
    """
    settings = get_settings()
    if max_count is not None:
        settings = settings.model_copy(update={"max_count": max_count})

    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_format)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["settings"] = settings


def _service(ctx: click.Context) -> DataService:
    settings: Settings = ctx.obj.get("settings") or get_settings()
    return DataService(settings=settings)


@cli.command()
@click.option("--keys", "-k", help="Comma-separated field names (see 'mockdata types')")
@click.option("--map", "-m", "map_text", help="JSON object mapping output keys to field names")
@click.option("--map-file", type=click.Path(exists=True), help="JSON or YAML file with a map spec")
@click.option("--type", "-t", "type_name", help="Preset type (see 'mockdata types')")
@_shaping_options
@click.pass_context
def generate(
    ctx: click.Context,
    keys: str | None,
    map_text: str | None,
    map_file: str | None,
    type_name: str | None,
    count: str | None,
    seed: str | None,
    fields: str | None,
    flatten: bool,
    output_format: str,
    output: str | None,
    pretty: bool,
) -> None:
    """Generate records from field keys, a map spec or a preset type.

    \b
    Examples:
      mockdata generate --keys firstName,lastName,email -n 5
      mockdata generate --map '{"id":"uuid","loc":{"lat":"latitude"}}'
      mockdata generate --type location --format csv --seed 42
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        if map_file:
            map_text = _load_map_file(map_file)

        response = _service(ctx).generate(_query(
            keys=keys,
            map=map_text,
            type=type_name,
            count=count,
            seed=seed,
            fields=fields,
            flatten=flatten,
            format=output_format,
        ))
        _emit(response, output, pretty)

    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.argument("preset_name", type=click.Choice([p.value for p in PresetType], case_sensitive=False))
@_shaping_options
@click.pass_context
def preset(
    ctx: click.Context,
    preset_name: str,
    count: str | None,
    seed: str | None,
    fields: str | None,
    flatten: bool,
    output_format: str,
    output: str | None,
    pretty: bool,
) -> None:
    """Generate one or more records of a preset type.

    PRESET_NAME is one of the types listed by 'mockdata types'.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        response = _service(ctx).preset(
            preset_name,
            _query(count=count, seed=seed, fields=fields, flatten=flatten, format=output_format),
            multiple=True,
        )
        _emit(response, output, pretty)

    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the discovery payload as JSON")
@click.pass_context
def types(ctx: click.Context, as_json: bool) -> None:
    """List preset types and atomic field names."""
    payload = _service(ctx).list_types_and_fields()

    if as_json:
        click.echo(json.dumps(payload, indent=2))
        return

    out = Console()

    type_table = Table(title="Preset Types")
    type_table.add_column("Type", style="cyan")
    type_table.add_column("Description")
    for name in payload["types"]:
        type_table.add_row(name, PRESET_DESCRIPTIONS.get(PresetType(name), ""))
    out.print(type_table)

    field_table = Table(title="Fields")
    field_table.add_column("Field", style="cyan")
    for name in payload["fields"]:
        field_table.add_row(name)
    out.print(field_table)


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Show service status and configured limits."""
    click.echo(json.dumps(_service(ctx).health(), indent=2))


if __name__ == "__main__":
    cli()
