"""Database layer for spendsense application."""

from spendsense.database.base import Database
from spendsense.database.factories import create_database

__all__ = ["Database", "create_database"]
