"""SMS import commands."""

import click

from spendsense.cli.error_handling import handle_domain_error
from spendsense.cli.session import format_amount, open_workspace, resolve_subgroup
from spendsense.domain.entities import TransactionDraft
from spendsense.domain.errors import DomainError, no_pending_draft
from spendsense.services.gemini import GeminiExtractor


def print_draft(draft: TransactionDraft) -> None:
    click.echo(f"  Amount: {format_amount(draft.amount)} ({draft.direction.value})")
    click.echo(f"  Date: {draft.date}")
    click.echo(f"  Merchant: {draft.merchant}")
    click.echo(f"  Bank: {draft.bank_name}")
    click.echo(f"  Reference: {draft.ref_no}")
    click.echo(f"  Suggested purpose: {draft.suggested_purpose}")


@click.group("import")
def import_group():
    """Import transactions from bank SMS text."""
    pass


@import_group.command("sms")
@click.argument("text", required=False)
@click.pass_context
def import_sms(ctx, text: str | None):
    """Extract a transaction from TEXT and hold it for review.

    Without TEXT a sample bank message is used. The draft is only saved as a
    transaction after 'import confirm' or 'import skip'.

    Examples:
        spendsense import sms "HDFC Bank: Rs. 1,250 debited at STARBUCKS. Ref: 40515923."
    """
    extractor = ctx.obj.get("extractor") or GeminiExtractor()
    workspace = open_workspace(ctx, extractor=extractor)
    try:
        draft = workspace.importer.process_import(text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if draft is None:
        click.echo("Error: Could not extract a transaction from the message. Nothing was imported.", err=True)
        ctx.exit(1)

    workspace.save()
    click.echo("Extracted transaction:")
    print_draft(draft)
    candidates = workspace.importer.candidate_groups()
    if candidates:
        click.echo("\nMatching ledger groups:")
        for group in candidates:
            names = ", ".join(f"{s.name} ({s.id})" for s in group.subgroups) or "no sub-groups"
            click.echo(f"  {group.name}: {names}")
    click.echo("\nRun 'import confirm --category <sub-group>' or 'import skip'.")


@import_group.command("pending")
@click.pass_context
def show_pending(ctx):
    """Show the draft waiting for review."""
    workspace = open_workspace(ctx)
    draft = workspace.importer.pending
    if draft is None:
        click.echo("No pending import.")
        return
    click.echo("Pending import:")
    print_draft(draft)
    if draft.raw_text:
        click.echo(f"  Source text: {draft.raw_text}")


@import_group.command("confirm")
@click.option("--category", required=True, help="Sub-group ID or path (e.g., 'HOUSEHOLD > Groceries')")
@click.option("--purpose", help="Purpose note (defaults to the suggested purpose)")
@click.pass_context
def confirm(ctx, category: str, purpose: str | None):
    """Save the pending draft under a sub-group."""
    workspace = open_workspace(ctx)
    try:
        transaction_id = workspace.importer.confirm(resolve_subgroup(workspace.taxonomy, category), purpose)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Created transaction {transaction_id}")


@import_group.command("skip")
@click.pass_context
def skip(ctx):
    """Save the pending draft without choosing a category."""
    workspace = open_workspace(ctx)
    try:
        transaction_id = workspace.importer.skip()
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Created transaction {transaction_id} under UNCATEGORIZED > SKIPPED")


@import_group.command("discard")
@click.pass_context
def discard(ctx):
    """Drop the pending draft without saving anything."""
    workspace = open_workspace(ctx)
    if workspace.importer.discard() is None:
        click.echo(f"Error: {no_pending_draft()}", err=True)
        ctx.exit(1)
    workspace.save()
    click.echo("Discarded pending import")


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group)
