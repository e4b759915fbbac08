"""Statement, dashboard, export and activity log commands."""

from pathlib import Path

import click

from spendsense.cli.session import format_amount, open_workspace
from spendsense.config import get_app_settings
from spendsense.domain.entities import Direction
from spendsense.domain.export import report_filename


@click.command("statement")
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), help="Only show groups of this type")
@click.pass_context
def statement(ctx, direction: str | None):
    """Show the ledger statement: totals per group and sub-group."""
    workspace = open_workspace(ctx)
    result = workspace.statement()

    click.echo("\nLedger Statement")
    click.echo("=" * 70)
    for group in result.groups:
        if direction is not None and group.direction != Direction(direction.upper()):
            continue
        heading = f"{group.name} [{group.direction.value}]"
        click.echo(f"{heading:<35} {format_amount(group.total):>16}")
        for line in group.lines:
            share = f"  ({line.percent_of_spend:.1f}% of spend)" if line.percent_of_spend is not None else ""
            click.echo(f"    {line.name:<30} {format_amount(line.total):>16}{share}")
    click.echo("=" * 70)
    click.echo(f"Total credit:  {format_amount(result.total_credit):>20}")
    click.echo(f"Total debit:   {format_amount(result.total_debit):>20}")
    click.echo(f"Net balance:   {format_amount(result.net_balance):>20}")
    click.echo(f"Net savings (ledger): {format_amount(result.ledger_net):>13}")
    if result.orphan_count:
        click.echo(
            f"\nWarning: {result.orphan_count} orphaned transaction(s) are counted in the totals above "
            f"but not in any group. See 'transaction orphans'."
        )


@click.command("dashboard")
@click.option("--days", type=int, help="Days in the spending chart (default from SPENDSENSE_DAILY_SERIES_DAYS)")
@click.pass_context
def dashboard(ctx, days: int | None):
    """Show income, expenses, recent activity and daily spending."""
    workspace = open_workspace(ctx)
    summary = workspace.dashboard(days=days or get_app_settings().daily_series_days)

    click.echo(f"Income:   {format_amount(summary.income):>18}")
    click.echo(f"Expenses: {format_amount(summary.expenses):>18}")
    click.echo(f"Balance:  {format_amount(summary.balance):>18}")

    if summary.spend_by_group:
        click.echo("\nSpending by group:")
        for name, total in summary.spend_by_group.items():
            click.echo(f"  {name:<30} {format_amount(total):>16}")

    click.echo("\nDaily spending:")
    peak = max((d.amount for d in summary.daily), default=0)
    for day in summary.daily:
        bar = "#" * int(day.amount / peak * 30) if peak else ""
        click.echo(f"  {day.label:<7} {format_amount(day.amount):>14} {bar}")

    if summary.recent:
        click.echo("\nRecent transactions:")
        for txn in summary.recent:
            sign = "+" if txn.direction == Direction.CREDIT else "-"
            click.echo(f"  {txn.date}  {sign}{format_amount(txn.amount):<14} {txn.merchant}")


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Output CSV file (default: SpendSense_Report_<timestamp>.csv in the current directory)",
)
@click.pass_context
def export(ctx, output: str | None):
    """Export all transactions to a CSV statement."""
    workspace = open_workspace(ctx)
    path = Path(output) if output else Path(report_filename())
    with path.open("w", newline="", encoding="utf-8") as f:
        count = workspace.export(f)
    workspace.save()
    click.echo(f"Exported {count} transaction(s) to {path}")


@click.command("log")
@click.option("--limit", type=int, default=20, show_default=True, help="Number of entries to show")
@click.pass_context
def activity_log(ctx, limit: int):
    """Show the activity log, newest first."""
    workspace = open_workspace(ctx)
    entries = workspace.activity.entries(limit=limit)
    if not entries:
        click.echo("No activity recorded.")
        return

    for entry in entries:
        click.echo(
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.action.value:<15} {entry.entity.value:<12} {entry.details}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    for command in (statement, dashboard, export, activity_log):
        cli.add_command(command)
