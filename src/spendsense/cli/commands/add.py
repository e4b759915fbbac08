"""Add transaction command."""

import click

from spendsense.cli.error_handling import handle_domain_error, parse_amount_or_exit, parse_date_or_exit
from spendsense.cli.session import open_workspace, resolve_subgroup
from spendsense.domain.entities import Direction
from spendsense.domain.errors import DomainError


@click.command("add")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), default="DEBIT", show_default=True, help="Transaction type")
@click.option("--amount", required=True, help="Transaction amount (e.g., 1250 or '₹1,250.50')")
@click.option("--bank", required=True, help="Bank name")
@click.option("--merchant", required=True, help="Merchant or payee")
@click.option("--category", required=True, help="Sub-group ID or path (e.g., 'HOUSEHOLD > Rent')")
@click.option("--purpose", default="", help="Purpose note")
@click.option("--ref", help="Reference number (generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    direction: str,
    amount: str,
    bank: str,
    merchant: str,
    category: str,
    purpose: str,
    ref: str | None,
):
    """Add a transaction manually.

    Examples:
        spendsense add --amount 1250 --bank HDFC --merchant Starbucks --category "HOUSEHOLD > Groceries"
        spendsense add --type CREDIT --amount 75000 --bank ICICI --merchant Employer --category sub-sal
    """
    workspace = open_workspace(ctx)
    txn_date = parse_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount)

    try:
        subgroup_id = resolve_subgroup(workspace.taxonomy, category)
        transaction_id = workspace.transactions.create_transaction(
            date=txn_date,
            direction=Direction(direction.upper()),
            amount=txn_amount,
            bank_name=bank,
            merchant=merchant,
            subgroup_id=subgroup_id,
            purpose=purpose,
            ref_no=ref,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    workspace.save()
    click.echo(f"Created transaction {transaction_id}")
    if workspace.taxonomy.find_group_for_subgroup(subgroup_id) is None:
        click.echo(f"Warning: sub-group '{subgroup_id}' does not exist; the transaction is orphaned.", err=True)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
