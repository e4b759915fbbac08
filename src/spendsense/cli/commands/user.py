"""User account commands."""

import click

from spendsense.cli.error_handling import handle_domain_error
from spendsense.cli.session import open_workspace, require_admin, require_user
from spendsense.domain.errors import DomainError
from spendsense.domain.users import FONTS, THEME_PRESETS, UserService

PROFILE_FIELDS = ("full_name", "pet_name", "dob", "occupation", "email", "mobile")


@click.command("signup")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password")
@click.pass_context
def signup(ctx, username: str, password: str):
    """Create an account and log in to it."""
    service = UserService(ctx.obj["db"])
    try:
        user = service.sign_up(username, password)
        service.login(user.username, password)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{user.username}' and logged in")


@click.command("login")
@click.argument("identifier")
@click.option("--password", prompt=True, hide_input=True, help="Password")
@click.pass_context
def login(ctx, identifier: str, password: str):
    """Log in with a user ID or email address."""
    service = UserService(ctx.obj["db"])
    try:
        user = service.login(identifier, password)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Logged in as {user.username}")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Log out."""
    UserService(ctx.obj["db"]).logout()
    click.echo("Logged out")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    user = require_user(ctx)
    click.echo(f"{user.username} <{user.email}> ({user.role})")
    click.echo(f"  Theme: {user.preferences.theme}, font: {user.preferences.font}")


@click.command("passwd")
@click.option("--current", prompt="Current password", hide_input=True, help="Current password")
@click.option("--new", "new_password", prompt="New password", hide_input=True, confirmation_prompt=True, help="New password")
@click.pass_context
def passwd(ctx, current: str, new_password: str):
    """Change your password."""
    user = require_user(ctx)
    try:
        UserService(ctx.obj["db"]).change_password(user.id, current, new_password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    workspace = open_workspace(ctx)
    workspace.record_password_change()
    workspace.save()
    click.echo("Password changed")


@click.command("prefs")
@click.option("--theme", type=click.Choice(THEME_PRESETS), help="Theme preset; also sets its font unless --font is given")
@click.option("--font", type=click.Choice(FONTS), help="Font")
@click.pass_context
def prefs(ctx, theme: str | None, font: str | None):
    """Show or change display preferences."""
    user = require_user(ctx)
    if theme is None and font is None:
        click.echo(f"Theme: {user.preferences.theme}")
        click.echo(f"Font: {user.preferences.font}")
        return

    try:
        updated = UserService(ctx.obj["db"]).update_preferences(user.id, theme=theme, font=font)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Preferences saved: theme {updated.theme}, font {updated.font}")


@click.command("profile")
@click.option("--full-name", help="Full name")
@click.option("--pet-name", help="Display name")
@click.option("--dob", help="Date of birth")
@click.option("--occupation", help="Occupation")
@click.option("--email", help="Contact email")
@click.option("--mobile", help="Mobile number")
@click.pass_context
def profile(ctx, **fields: str | None):
    """Show or update your profile.

    Examples:
        spendsense profile
        spendsense profile --full-name "Asha Rao" --mobile 9800000000
    """
    user = require_user(ctx)
    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        current = user.profile
        for key in PROFILE_FIELDS:
            value = getattr(current, key) if current is not None else ""
            click.echo(f"{key.replace('_', ' ').title()}: {value}")
        return

    UserService(ctx.obj["db"]).update_profile(user.id, **changes)
    workspace = open_workspace(ctx)
    workspace.record_profile_update(sorted(changes))
    workspace.save()
    click.echo(f"Profile updated: {', '.join(sorted(changes))}")


@click.command("users")
@click.pass_context
def users(ctx):
    """List all users (admin only)."""
    require_admin(ctx)
    all_users = UserService(ctx.obj["db"]).list_users()
    click.echo(f"{'ID':<18} {'User ID':<20} {'Email':<30} {'Role':<6}")
    click.echo("-" * 76)
    for user in all_users:
        click.echo(f"{user.id:<18} {user.username:<20} {user.email:<30} {user.role:<6}")


def register_commands(cli):
    """Register user commands with main CLI."""
    for command in (signup, login, logout, whoami, passwd, prefs, profile, users):
        cli.add_command(command)
