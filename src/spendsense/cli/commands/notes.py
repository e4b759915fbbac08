"""Daily notes and receivables commands."""

from datetime import date

import click

from spendsense.cli.error_handling import handle_domain_error, parse_amount_or_exit, parse_date_or_exit
from spendsense.cli.session import format_amount, open_workspace
from spendsense.domain.errors import DomainError


@click.group()
def notes_group():
    """Keep daily notes."""
    pass


@notes_group.command("list")
@click.pass_context
def list_notes(ctx):
    """List notes, newest first."""
    workspace = open_workspace(ctx)
    if not workspace.notes.notes:
        click.echo("No notes.")
        return
    for note in workspace.notes.notes:
        click.echo(f"{note.date}  {note.title} (ID: {note.id})")
        if note.content:
            click.echo(f"    {note.content}")


@notes_group.command("add")
@click.argument("title")
@click.option("--content", default="", help="Note text")
@click.option("--date", "note_date", help="Note date (default: today)")
@click.pass_context
def add_note(ctx, title: str, content: str, note_date: str | None):
    """Add a note."""
    workspace = open_workspace(ctx)
    parsed = parse_date_or_exit(ctx, note_date) if note_date else None
    try:
        note_id = workspace.notes.add_note(title, content, note_date=parsed)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Added note {note_id}")


@notes_group.command("delete")
@click.argument("note_id")
@click.pass_context
def delete_note(ctx, note_id: str):
    """Delete a note."""
    workspace = open_workspace(ctx)
    try:
        workspace.notes.delete_note(note_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Deleted note {note_id}")


@click.group()
def receivable_group():
    """Track money owed to you."""
    pass


@receivable_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include settled receivables")
@click.pass_context
def list_receivables(ctx, show_all: bool):
    """List receivables."""
    workspace = open_workspace(ctx)
    receivables = [r for r in workspace.notes.receivables if show_all or not r.is_settled]
    if not receivables:
        click.echo("No receivables.")
        return

    overdue = {r.id for r in workspace.notes.overdue()}
    for r in receivables:
        status = "settled" if r.is_settled else ("OVERDUE" if r.id in overdue else "open")
        due = f" due {r.due_date}" if r.due_date else ""
        click.echo(f"{r.id:<16} {r.debtor_name:<20} {format_amount(r.amount):>14}  {status}{due}  {r.purpose}")
    click.echo(f"\nOutstanding: {format_amount(workspace.notes.outstanding_total())}")


@receivable_group.command("add")
@click.argument("debtor")
@click.argument("amount")
@click.option("--purpose", default="", help="What the money was for")
@click.option("--date", "lent_on", help="Date lent (default: today)")
@click.option("--due", "due_date", help="Due date")
@click.pass_context
def add_receivable(ctx, debtor: str, amount: str, purpose: str, lent_on: str | None, due_date: str | None):
    """Record AMOUNT lent to DEBTOR."""
    workspace = open_workspace(ctx)
    parsed_amount = parse_amount_or_exit(ctx, amount)
    lent: date | None = parse_date_or_exit(ctx, lent_on) if lent_on else None
    due: date | None = parse_date_or_exit(ctx, due_date, "due date") if due_date else None
    try:
        receivable_id = workspace.notes.add_receivable(debtor, parsed_amount, purpose, lent_on=lent, due_date=due)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Added receivable {receivable_id}")


@receivable_group.command("settle")
@click.argument("receivable_id")
@click.pass_context
def settle_receivable(ctx, receivable_id: str):
    """Mark a receivable as paid back."""
    workspace = open_workspace(ctx)
    try:
        receivable = workspace.notes.settle_receivable(receivable_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Settled {format_amount(receivable.amount)} from {receivable.debtor_name}")


@receivable_group.command("delete")
@click.argument("receivable_id")
@click.pass_context
def delete_receivable(ctx, receivable_id: str):
    """Delete a receivable."""
    workspace = open_workspace(ctx)
    try:
        workspace.notes.delete_receivable(receivable_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Deleted receivable {receivable_id}")


def register_commands(cli):
    """Register notes and receivable commands with main CLI."""
    cli.add_command(notes_group, name="notes")
    cli.add_command(receivable_group, name="receivable")
