"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a username that is already taken."""


class AuthenticationError(DomainError):
    """Credentials did not match a known user."""


class ExtractionError(DomainError):
    """Free text could not be turned into a transaction draft."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def username_taken(username: str) -> str:
    """Return message when signing up with an existing username."""
    return f"User ID '{username}' is already taken"


def no_pending_draft() -> str:
    """Return message when an import action has nothing to act on."""
    return "No pending import. Run 'import sms' first."
