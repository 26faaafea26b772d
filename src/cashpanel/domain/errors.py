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


class MalformedFiscalPayload(DomainError):
    """Fiscal payload has no recognizable guide/declaration structure.

    Callers must report this as "diagnosis unavailable", never as a clean
    fiscal situation.
    """


def entry_not_found(entry_id: int) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def entry_not_in_series(entry_id: int) -> str:
    """Return message when a series operation targets a standalone entry."""
    return f"Entry {entry_id} is not part of an installment or recurring series"


def unrecognized_fiscal_payload(kind: str) -> str:
    """Return message for a fiscal payload no shape matcher accepted."""
    return (
        f"Could not locate guides or declarations in fiscal payload "
        f"(received {kind})"
    )
