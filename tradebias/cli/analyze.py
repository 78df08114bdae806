"""Analysis commands for TradeBias CLI.

Handles trade log analysis, row validation and the rule threshold listing.
"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradebias.config import Settings
from tradebias.engine import DEFAULT_THRESHOLDS, BiasThresholds, analyze_trades
from tradebias.errors import IngestError
from tradebias.ingest import IngestResult, RowError, load_trades_csv
from tradebias.models import AnalysisReport, BiasInsight, TradeStats

console = Console()

SEVERITY_COLORS = {
    "high": "red",
    "medium": "yellow",
    "low": "green",
}

# Cap on error rows printed before summarizing the rest
MAX_ERRORS_SHOWN = 20


def _get_settings(ctx: click.Context) -> Settings:
    """Settings loaded by the root group, or defaults."""
    obj = ctx.find_object(dict) or {}
    return obj.get("settings") or Settings()


def _print_error(title: str, message: str) -> None:
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _load(path: Path) -> IngestResult:
    """Load a trade file, exiting with an error panel on failure."""
    try:
        return load_trades_csv(path)
    except IngestError as e:
        _print_error("Error", str(e))
        raise SystemExit(1)


def _error_table(errors: list[RowError]) -> Table:
    table = Table(
        title="Rejected Rows",
        show_header=True,
        header_style="bold red",
    )
    table.add_column("Row", justify="right", style="bold")
    table.add_column("Problem")

    for error in errors[:MAX_ERRORS_SHOWN]:
        table.add_row(str(error.row_number), escape(error.message))

    if len(errors) > MAX_ERRORS_SHOWN:
        table.add_row("...", f"[dim]{len(errors) - MAX_ERRORS_SHOWN} more[/dim]")

    return table


def format_stats(stats: TradeStats, currency: str = "$") -> str:
    """Render trade statistics as panel text."""
    pf_color = "green" if stats.profit_factor >= 1 else "red"
    wr_color = "green" if stats.win_rate >= 50 else "yellow"

    return (
        f"Total Trades:   [bold]{stats.total_trades}[/bold]\n"
        f"Win Rate:       [{wr_color}]{stats.win_rate:.1f}%[/{wr_color}]\n"
        f"Avg Profit:     [green]{currency}{stats.avg_profit:,.2f}[/green]\n"
        f"Avg Loss:       [red]{currency}{stats.avg_loss:,.2f}[/red]\n"
        f"{'─' * 30}\n"
        f"[bold]Profit Factor:  [{pf_color}]{stats.profit_factor:.2f}[/{pf_color}][/bold]"
    )


def _insight_table(insights: list[BiasInsight]) -> Table:
    table = Table(
        title="Behavioral Insights",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    table.add_column("Bias", style="bold")
    table.add_column("Severity", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Details", max_width=60)

    for insight in insights:
        color = SEVERITY_COLORS.get(insight.severity, "white")
        table.add_row(
            insight.type,
            f"[{color}]{insight.severity.upper()}[/{color}]",
            f"{insight.metric:.0f}",
            f"{insight.description}\n[dim]→ {insight.recommendation}[/dim]",
        )

    return table


def render_report(report: AnalysisReport, currency: str = "$") -> None:
    """Print a report as rich panels and tables."""
    console.print(Panel(
        format_stats(report.stats, currency),
        title="[bold cyan]Trading Statistics[/bold cyan]",
        border_style="cyan",
    ))

    if not report.insights:
        console.print(Panel(
            "[green]No significant biases detected.[/green]",
            title="[bold]Behavioral Insights[/bold]",
            border_style="green",
        ))
        return

    console.print(_insight_table(report.insights))


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the report as JSON.",
)
@click.pass_context
def analyze(ctx: click.Context, file: Path, as_json: bool) -> None:
    """Analyze a trade log for statistics and behavioral biases.

    FILE is a CSV with columns date, symbol, action, quantity, price.
    Invalid rows are reported and skipped unless [ingest] strict = true
    is set in the config file.

    \b
    Examples:
      tradebias analyze trades.csv
      tradebias analyze trades.csv --json
    """
    settings = _get_settings(ctx)
    result = _load(file)

    if result.errors:
        if settings.ingest.strict:
            console.print(_error_table(result.errors))
            _print_error("Error", f"{len(result.errors)} invalid row(s); strict mode is on.")
            raise SystemExit(1)
        if not as_json:
            console.print(_error_table(result.errors))
            console.print(f"[yellow]Skipped {len(result.errors)} invalid row(s).[/yellow]\n")

    report = analyze_trades(result.trades)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    render_report(report, settings.display.currency)


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
def validate(file: Path) -> None:
    """Check a trade log without analyzing it.

    Exits with status 1 if any row is invalid.

    \b
    Examples:
      tradebias validate trades.csv
    """
    result = _load(file)

    if result.ok:
        console.print(f"[green]✓[/green] {len(result.trades)} valid trade(s) in {escape(str(file))}")
        return

    console.print(_error_table(result.errors))
    console.print(
        f"\n[bold]{len(result.trades)}[/bold] valid, "
        f"[bold red]{len(result.errors)}[/bold red] invalid of {result.row_count} row(s)"
    )
    raise SystemExit(1)


@click.command()
def rules() -> None:
    """List the bias rules and their thresholds.

    \b
    Examples:
      tradebias rules
    """
    table = Table(
        title="Bias Rule Thresholds",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Threshold", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Meaning")

    for name, field in BiasThresholds.model_fields.items():
        table.add_row(name, f"{getattr(DEFAULT_THRESHOLDS, name):g}", field.description or "")

    console.print(table)
