"""Command line entry point for tastyharvest."""

import json
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tastyharvest.components import IncrementalHarvester
from tastyharvest.config_reader import ConfigReader
from tastyharvest.exceptions import ConfigurationError, TastyHarvestError
from tastyharvest.harvester.paginated import PaginatedHarvester, SourceConfig

console = Console(stderr=True)


def _load_source_config(
    config_path: str, env_file: str | None, overrides: dict[str, Any]
) -> SourceConfig:
    try:
        data = ConfigReader(env_file=env_file).read(config_path)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    # Pipeline-style files keep the source settings in their own section
    data = dict(data.get("source", data))
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SourceConfig.from_env(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid source configuration: {e}") from e


@click.group()
@click.version_option(version="0.1.0", prog_name="tastyharvest")
def cli():
    """Harvest records from Tastypie-style paginated REST APIs."""
    pass


@cli.command()
@click.argument("config_path", type=click.Path(exists=True))
@click.option("--env-file", type=click.Path(exists=True), help="Load a .env file first")
@click.option("--limit-pages", type=int, help="Fetch at most this many pages")
def count(config_path: str, env_file: str | None, limit_pages: int | None):
    """Show how many records a run would attempt to fetch.

    CONFIG_PATH: Path to source configuration file (YAML or JSON)
    """
    try:
        config = _load_source_config(
            config_path, env_file, {"limit_pages": limit_pages}
        )
        harvester = PaginatedHarvester(config)
        plan = harvester.plan
    except TastyHarvestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    table = Table(title=str(harvester))
    table.add_column("URL")
    table.add_column("Page size", justify="right")
    table.add_column("Pages", justify="right")
    table.add_column("Records", justify="right")
    table.add_column("Available", justify="right")
    table.add_row(
        config.url,
        str(plan.limit),
        str(plan.pages),
        str(plan.count),
        str(plan.total_count),
    )
    console.print(table)
    click.echo(plan.count)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True))
@click.option("--env-file", type=click.Path(exists=True), help="Load a .env file first")
@click.option(
    "--state",
    "-s",
    "state_path",
    type=click.Path(),
    help="JSON state file, read before and written after the run",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Write records as JSON lines to this file instead of stdout",
)
@click.option(
    "--partial/--full",
    default=None,
    help="Stop early once unchanged records pile up",
)
@click.option(
    "--item-limit",
    "-l",
    type=int,
    help="Limit number of records to fetch (0 for all)",
)
@click.option("--limit-pages", type=int, help="Fetch at most this many pages")
def harvest(
    config_path: str,
    env_file: str | None,
    state_path: str | None,
    output: str | None,
    partial: bool | None,
    item_limit: int | None,
    limit_pages: int | None,
):
    """Harvest records and report what changed since the last run.

    CONFIG_PATH: Path to source configuration file (YAML or JSON)
    """
    state = None
    if state_path and Path(state_path).exists():
        try:
            with open(state_path) as f:
                state = json.load(f)
        except (OSError, ValueError) as e:
            console.print(f"[red]Error: cannot read state {escape(str(e))}[/red]")
            raise SystemExit(1)
        if not isinstance(state, dict):
            console.print(f"[red]Error: state file {state_path} is not a mapping[/red]")
            raise SystemExit(1)

    try:
        config = _load_source_config(
            config_path,
            env_file,
            {
                "partial_migrate": partial,
                "item_limit": item_limit,
                "limit_pages": limit_pages,
            },
        )
        harvester = PaginatedHarvester(config)
        console.print(f"[bold blue]Harvesting {config.url}[/bold blue]")
        result = IncrementalHarvester(harvester).run(state)
    except TastyHarvestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    lines = [json.dumps(record, ensure_ascii=False) for record in result.records]
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            f.writelines(line + "\n" for line in lines)
    else:
        for line in lines:
            click.echo(line)

    if state_path:
        Path(state_path).parent.mkdir(parents=True, exist_ok=True)
        with open(state_path, "w") as f:
            json.dump(result.state, f, indent=2)

    counts = {op_type: 0 for op_type in ("add", "update", "delete")}
    for operation in result.operations:
        counts[operation.type.value] += 1

    console.print(f"[green]✓[/green] Harvested {len(result.records)} records")
    console.print(
        f"  Added: {counts['add']}  Updated: {counts['update']}  "
        f"Deleted: {counts['delete']}"
    )
    console.print(f"  Stopped: {result.stop_reason}")
    if result.skipped:
        console.print(f"[yellow]  Skipped {result.skipped} records without id[/yellow]")


if __name__ == "__main__":
    cli()
