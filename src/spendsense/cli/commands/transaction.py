"""Transaction management commands."""

import click

from spendsense.cli.error_handling import handle_domain_error, parse_amount_or_exit, parse_date_or_exit
from spendsense.cli.session import format_amount, open_workspace, resolve_subgroup
from spendsense.domain.aggregation import directional_total
from spendsense.domain.entities import Direction, Transaction
from spendsense.domain.errors import DomainError, transaction_not_found
from spendsense.domain.taxonomy import TaxonomyStore
from spendsense.utils.date_parser import PERIODS, get_date_range


def category_label(taxonomy: TaxonomyStore, txn: Transaction) -> str:
    """Return "Group > Sub-group", or a marker when the link is broken."""
    group = taxonomy.find_group(txn.group_id)
    subgroup_name = taxonomy.find_subgroup_name(txn.group_id, txn.subgroup_id)
    if group is None or subgroup_name is None:
        return "(orphaned)"
    return f"{group.name} > {subgroup_name}"


def print_transaction_table(taxonomy: TaxonomyStore, transactions: list[Transaction]) -> None:
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<16} {'Date':<12} {'Type':<7} {'Amount':>14}  {'Bank':<12} {'Merchant':<20} {'Category':<25}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.id:<16} {str(txn.date):<12} {txn.direction.value:<7} {format_amount(txn.amount):>14}  "
            f"{txn.bank_name[:12]:<12} {txn.merchant[:20]:<20} {category_label(taxonomy, txn)[:25]:<25}"
        )


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS, case_sensitive=False), help="Named period instead of explicit dates")
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), help="Only this type")
@click.option("--group", "group_id", help="Only transactions filed under this group ID")
@click.pass_context
def list_transactions(ctx, start_date, end_date, period, direction, group_id):
    """View transactions, newest first, with optional filters."""
    if period and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    workspace = open_workspace(ctx)
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    if period:
        start, end = get_date_range(period)

    transactions = workspace.transactions.list_transactions(
        start_date=start,
        end_date=end,
        direction=Direction(direction.upper()) if direction else None,
        group_id=group_id,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    print_transaction_table(workspace.taxonomy, transactions)
    click.echo("-" * 110)
    click.echo(
        f"Credit: {format_amount(directional_total(transactions, Direction.CREDIT))} | "
        f"Debit: {format_amount(directional_total(transactions, Direction.DEBIT))} | "
        f"Count: {len(transactions)}"
    )


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show every field of one transaction."""
    workspace = open_workspace(ctx)
    txn = workspace.transactions.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: {transaction_not_found(transaction_id)}", err=True)
        ctx.exit(1)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.direction.value}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Bank: {txn.bank_name}")
    click.echo(f"  Reference: {txn.ref_no}")
    click.echo(f"  Merchant: {txn.merchant}")
    click.echo(f"  Category: {category_label(workspace.taxonomy, txn)}")
    if txn.purpose:
        click.echo(f"  Purpose: {txn.purpose}")
    if txn.suggested_purpose:
        click.echo(f"  Suggested purpose: {txn.suggested_purpose}")
    if txn.raw_text:
        click.echo(f"  Source text: {txn.raw_text}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), help="Transaction type")
@click.option("--amount", help="Transaction amount")
@click.option("--bank", help="Bank name")
@click.option("--merchant", help="Merchant or payee")
@click.option("--category", help="Sub-group ID or path (e.g., 'HOUSEHOLD > Rent')")
@click.option("--purpose", help="Purpose note")
@click.option("--ref", help="Reference number")
@click.pass_context
def update_transaction(ctx, transaction_id, date, direction, amount, bank, merchant, category, purpose, ref):
    """Update a transaction.

    Updates only the fields that are provided. Changing --category re-files
    the transaction, which also repairs an orphan.

    Examples:
        spendsense transaction update tx-1a2b3c --amount 75.00
        spendsense transaction update tx-1a2b3c --category "HOUSEHOLD > Rent"
    """
    workspace = open_workspace(ctx)
    try:
        subgroup_id = resolve_subgroup(workspace.taxonomy, category) if category is not None else None
        workspace.transactions.update_transaction(
            transaction_id,
            date=parse_date_or_exit(ctx, date) if date is not None else None,
            direction=Direction(direction.upper()) if direction else None,
            amount=parse_amount_or_exit(ctx, amount) if amount is not None else None,
            bank_name=bank,
            merchant=merchant,
            subgroup_id=subgroup_id,
            purpose=purpose,
            ref_no=ref,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Updated transaction {transaction_id}")
    if subgroup_id is not None and workspace.taxonomy.find_group_for_subgroup(subgroup_id) is None:
        click.echo(f"Warning: sub-group '{subgroup_id}' does not exist; the transaction is orphaned.", err=True)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool):
    """Delete a transaction.

    Examples:
        spendsense transaction delete tx-1a2b3c
    """
    workspace = open_workspace(ctx)
    if workspace.transactions.get_transaction(transaction_id) is None:
        click.echo(f"Error: {transaction_not_found(transaction_id)}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        workspace.transactions.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("orphans")
@click.pass_context
def list_orphans(ctx):
    """List transactions whose group or sub-group no longer exists."""
    workspace = open_workspace(ctx)
    orphans = workspace.orphans()
    if not orphans:
        click.echo("No orphaned transactions.")
        return

    click.echo(f"\n{len(orphans)} orphaned transaction(s). Re-file them with 'transaction update --category':")
    print_transaction_table(workspace.taxonomy, orphans)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
