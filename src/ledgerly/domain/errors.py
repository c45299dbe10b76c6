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
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


ENTRY_REQUIRES_LINES = "Journal entry requires at least one line item."
ENTRY_NOT_BALANCED = "Journal entry is not balanced."
LINE_NEGATIVE_AMOUNT = "Journal entry line cannot have a negative amount."
LINE_DEBIT_AND_CREDIT = "Journal entry line cannot have both a debit and a credit."


def account_not_found(code: str) -> str:
    """Return message for missing chart-of-accounts row."""
    return f"Account '{code}' not found"


def journal_entry_not_found(target: str) -> str:
    """Return message when no journal entry matches an id or reference."""
    return f"No journal entry matches '{target}'"


def account_delete_blocked(code: str, line_count: int) -> str:
    """Return message when journal lines still post to an account."""
    return (
        f"Cannot delete account {code}: it has "
        f"{line_count} journal line{'s' if line_count != 1 else ''}. "
        "Please delete or repost those entries first."
    )
