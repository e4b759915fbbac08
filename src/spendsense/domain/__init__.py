"""Domain layer for spendsense application.

``users`` and ``workspace`` depend on the database layer and are imported
from their modules directly.
"""

from spendsense.domain.activity import ActivityLog
from spendsense.domain.taxonomy import TaxonomyStore
from spendsense.domain.transaction import TransactionService, TransactionStore
from spendsense.domain.importer import ImportService
from spendsense.domain.notes import NotesService

__all__ = [
    "ActivityLog",
    "TaxonomyStore",
    "TransactionService",
    "TransactionStore",
    "ImportService",
    "NotesService",
]
