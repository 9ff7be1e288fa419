"""CLI entrypoint for pergroup."""

import json
from pathlib import Path
from typing import Annotated

import polars as pl
import typer
from rich.console import Console

from pergroup.config import ProfileConfig, load_profile_config
from pergroup.queries import TECHNIQUE_DESCRIPTIONS, QuerySpec, Technique

app = typer.Typer(
    name="pergroup",
    help="Select the first, least, or top-N row per group, four ways",
    no_args_is_help=True,
)
console = Console()

# Default config path (relative to package root: src/pergroup/cli.py -> repository root)
PACKAGE_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG = PACKAGE_ROOT / "configs" / "pergroup.yaml"

ProfileOption = Annotated[str, typer.Option(help="Profile name in the config file")]
ConfigOption = Annotated[Path, typer.Option("--config", "-c", help="Config file path")]
DataOption = Annotated[
    Path | None, typer.Option("--data", "-d", help="Parquet, csv or JSON records file")
]
LimitOption = Annotated[int | None, typer.Option("--limit", "-n", min=1, help="Rows per group")]
LargestOption = Annotated[
    bool, typer.Option("--largest", help="Pick the largest values instead of the smallest")
]


def _load_profile(config: Path, profile: str) -> ProfileConfig:
    if profile == "default" and not config.exists():
        return ProfileConfig()
    return load_profile_config(config, profile)


def _resolve(
    config: Path, profile: str, limit: int | None, largest: bool
) -> tuple[QuerySpec, Path | None]:
    """Merge command-line overrides into the profile's query settings."""
    settings = _load_profile(config, profile)
    overrides = {}
    if limit is not None:
        overrides["limit"] = limit
    if largest:
        overrides["largest"] = True
    spec = QuerySpec(**{**settings.query.model_dump(), **overrides})
    return spec, settings.data_path


def _load_frame(data: Path | None) -> pl.DataFrame:
    from pergroup.data import get_fruits_table, load_fruit_records

    if data is not None and data.suffix.lower() == ".json":
        return load_fruit_records(data)
    return get_fruits_table(str(data) if data else None).read()


@app.command()
def run(
    technique: Annotated[str, typer.Argument(help="self_join, correlated, count_top_n, union_all or window")],
    limit: LimitOption = None,
    largest: LargestOption = False,
    backend: Annotated[str, typer.Option(help="Backend: sql or polars")] = "sql",
    data: DataOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    profile: ProfileOption = "default",
    no_sql: Annotated[bool, typer.Option("--no-sql", help="Hide the SQL statement")] = False,
    output: Annotated[Path | None, typer.Option(help="Output JSON file")] = None,
):
    """Run one technique and print its result set."""
    from pergroup.engine import run_technique
    from pergroup.report import print_result

    spec, data_path = _resolve(config, profile, limit, largest)
    frame = _load_frame(data or data_path)

    parsed = Technique.parse(technique)
    console.print(f"[dim]{TECHNIQUE_DESCRIPTIONS[parsed]}[/dim]")

    result = run_technique(parsed, spec, frame, backend)
    print_result(result, console, show_sql=not no_sql)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        console.print(f"\n[green]Result saved to {output}[/green]")


@app.command()
def compare(
    limit: LimitOption = None,
    largest: LargestOption = False,
    data: DataOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    profile: ProfileOption = "default",
    include_window: Annotated[
        bool, typer.Option("--window", help="Also run the ROW_NUMBER() reference query")
    ] = False,
    output: Annotated[Path | None, typer.Option(help="Output JSON file")] = None,
):
    """Run every technique on both backends and check the results agree."""
    from pergroup.compare import compare_techniques, default_techniques
    from pergroup.report import print_report

    spec, data_path = _resolve(config, profile, limit, largest)
    frame = _load_frame(data or data_path)

    techniques = default_techniques(spec)
    if include_window:
        techniques = [Technique.WINDOW, *techniques]

    console.print(
        f"[bold]Comparing {len(techniques)} techniques[/bold] "
        f"({spec.aggregate.lower()} {spec.value_column} per {spec.group_column}, limit {spec.limit})\n"
    )
    report = compare_techniques(spec, frame, techniques)
    print_report(report, console)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        console.print(f"\n[green]Report saved to {output}[/green]")

    if not report.equivalent:
        raise typer.Exit(code=1)


@app.command()
def sql(
    technique: Annotated[str, typer.Argument(help="Technique name")],
    limit: LimitOption = None,
    largest: LargestOption = False,
    data: DataOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    profile: ProfileOption = "default",
):
    """Print the SQL statement for a technique without running it."""
    from pergroup.engine import SqlEngine
    from pergroup.queries import build_sql

    spec, data_path = _resolve(config, profile, limit, largest)
    parsed = Technique.parse(technique)

    groups = None
    if parsed == Technique.UNION_ALL:
        # UNION ALL spells out every group, so it needs to see the data
        with SqlEngine(_load_frame(data or data_path), spec.table) as engine:
            groups = engine.groups(spec.group_column)

    typer.echo(build_sql(parsed, spec, groups))


@app.command()
def sample(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to .parquet or .csv")
    ] = None,
):
    """Show the sample fruits table, or write it to a file."""
    from pergroup.data import load_sample_fruits
    from pergroup.report import result_table

    df = load_sample_fruits()

    if output is None:
        console.print(result_table(df))
        return

    suffix = output.suffix.lower()
    if suffix in [".parquet", ".pq"]:
        df.write_parquet(output)
    elif suffix == ".csv":
        df.write_csv(output)
    else:
        raise typer.BadParameter(f"Unsupported file format: {suffix}. Use .parquet or .csv")
    console.print(f"[green]Wrote {len(df)} rows to {output}[/green]")
    console.print(f"  FRUITS_PATH={output.absolute()}")


@app.command()
def columns(data: DataOption = None):
    """Show the columns of the fruits table."""
    from pergroup.data import Table

    console.print(Table.from_frame(_load_frame(data)).columns())


@app.command()
def version():
    """Show version information."""
    from pergroup import __version__

    console.print(f"pergroup version {__version__}")


if __name__ == "__main__":
    app()
