"""Ledger group and sub-group commands."""

import click

from spendsense.cli.error_handling import handle_domain_error
from spendsense.cli.session import open_workspace
from spendsense.domain.entities import Direction
from spendsense.domain.errors import DomainError


@click.group()
def ledger_group():
    """Manage ledger groups and sub-groups."""
    pass


@ledger_group.command("list")
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), help="Only show groups of this type")
@click.pass_context
def list_ledgers(ctx, direction: str | None):
    """List groups and their sub-groups in tree format."""
    workspace = open_workspace(ctx)
    groups = workspace.taxonomy.groups
    if direction is not None:
        groups = workspace.taxonomy.groups_for_direction(Direction(direction.upper()))

    if not groups:
        click.echo("No ledger groups found.")
        return

    for group in groups:
        click.echo(f"{group.name} [{group.direction.value}] (ID: {group.id})")
        for sub in group.subgroups:
            click.echo(f"  {sub.name} (ID: {sub.id})")


@ledger_group.command("add-group")
@click.argument("name")
@click.option("--type", "direction", type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False), default="DEBIT", help="Group type (default: DEBIT)")
@click.pass_context
def add_group(ctx, name: str, direction: str):
    """Create a ledger group."""
    workspace = open_workspace(ctx)
    try:
        group_id = workspace.add_group(name, Direction(direction.upper()))
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Created group '{name.strip()}' (ID: {group_id})")


@ledger_group.command("remove-group")
@click.argument("group_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_group(ctx, group_id: str, yes: bool):
    """Remove a group and all of its sub-groups.

    Transactions filed under the group are kept and become orphans.
    """
    workspace = open_workspace(ctx)
    group = workspace.taxonomy.find_group(group_id)
    if group is None:
        click.echo(f"Error: Group {group_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Remove group '{group.name}' and its sub-groups?"):
        click.echo("Removal cancelled.")
        return

    workspace.remove_group(group_id)
    workspace.save()
    orphans = len(workspace.orphans())
    click.echo(f"Removed group '{group.name}'")
    if orphans:
        click.echo(f"{orphans} orphaned transaction(s) need attention. See 'transaction orphans'.")


@ledger_group.command("add-subgroup")
@click.argument("group_id")
@click.argument("name")
@click.pass_context
def add_subgroup(ctx, group_id: str, name: str):
    """Create a sub-group under GROUP_ID."""
    workspace = open_workspace(ctx)
    try:
        subgroup_id = workspace.add_subgroup(group_id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Created sub-group '{name}' (ID: {subgroup_id})")


@ledger_group.command("remove-subgroup")
@click.argument("group_id")
@click.argument("subgroup_id")
@click.pass_context
def remove_subgroup(ctx, group_id: str, subgroup_id: str):
    """Remove a sub-group. Its transactions become orphans."""
    workspace = open_workspace(ctx)
    try:
        subgroup = workspace.remove_subgroup(group_id, subgroup_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    workspace.save()
    click.echo(f"Removed sub-group '{subgroup.name}'")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
