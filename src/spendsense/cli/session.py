"""CLI helpers for the logged-in user and their workspace."""

from decimal import Decimal
from typing import Optional

import click

from spendsense.config import get_app_settings
from spendsense.domain.entities import User
from spendsense.domain.errors import NotFoundError
from spendsense.domain.importer import TransactionExtractor
from spendsense.domain.taxonomy import TaxonomyStore
from spendsense.domain.users import UserService
from spendsense.domain.workspace import LedgerWorkspace


def require_user(ctx: click.Context) -> User:
    """Return the logged-in user, or exit asking the user to log in."""
    user = UserService(ctx.obj["db"]).current_user()
    if user is None:
        click.echo("Error: Not logged in. Run 'spendsense login' first.", err=True)
        ctx.exit(1)
    return user


def require_admin(ctx: click.Context) -> User:
    user = require_user(ctx)
    if not user.is_admin:
        click.echo("Error: This command requires an admin account.", err=True)
        ctx.exit(1)
    return user


def open_workspace(
    ctx: click.Context, extractor: Optional[TransactionExtractor] = None
) -> LedgerWorkspace:
    """Load the logged-in user's workspace. Callers save() it after mutating."""
    user = require_user(ctx)
    return LedgerWorkspace.load(ctx.obj["db"], user.id, extractor=extractor)


def format_amount(amount: Decimal) -> str:
    return f"{get_app_settings().currency_symbol}{amount:,.2f}"


def resolve_subgroup(taxonomy: TaxonomyStore, value: str) -> str:
    """Resolve a sub-group given by ID or by "Group > Sub-group" path.

    Names are matched case-insensitively. A value without ">" is returned
    unchanged and treated as an ID, known or not.

    Raises:
        NotFoundError: If a path is given and no sub-group matches it
    """
    if ">" not in value:
        return value.strip()

    group_name, _, subgroup_name = (part.strip().lower() for part in value.partition(">"))
    for group in taxonomy.groups:
        if group.name.lower() != group_name:
            continue
        for sub in group.subgroups:
            if sub.name.lower() == subgroup_name:
                return sub.id
    raise NotFoundError(f"Category '{value}' not found")
