"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from spendsense.domain.entities import User

# Dataset names stored per user
LEDGERS = "ledgers"
TRANSACTIONS = "transactions"
LOGS = "logs"
NOTES = "notes"
RECEIVABLES = "receivables"
PENDING_DRAFT = "pending_draft"


class Database(ABC):
    """Abstract database interface for spendsense."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def save_user(self, user: User) -> None:
        """Insert or replace a user."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users in creation order."""
        pass

    # Session operations
    @abstractmethod
    def get_session_user(self) -> Optional[str]:
        """Return the logged-in user ID, if any."""
        pass

    @abstractmethod
    def set_session_user(self, user_id: Optional[str]) -> None:
        """Record the logged-in user ID, or clear it with None."""
        pass

    # Dataset operations
    @abstractmethod
    def load_dataset(self, user_id: str, name: str) -> Optional[Any]:
        """Load a user's dataset as decoded JSON, or None if never saved."""
        pass

    @abstractmethod
    def save_dataset(self, user_id: str, name: str, payload: Any) -> None:
        """Replace a user's dataset with a JSON-serializable payload."""
        pass

    @abstractmethod
    def delete_dataset(self, user_id: str, name: str) -> None:
        """Remove a user's dataset if present."""
        pass
