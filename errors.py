"""Error types raised by FinFlow services and tools."""


class FinFlowError(Exception):
    """Base class for all FinFlow errors."""


class ValidationError(FinFlowError, ValueError):
    """Input rejected before reaching the store.

    Raised for missing fields, non-positive amounts, categories that do not
    belong to the transaction type, unknown banks or priorities, and
    installment counts outside the supported range.
    """


class NotFoundError(FinFlowError, LookupError):
    """The record to update or delete does not exist for this user."""


class StoreError(FinFlowError):
    """A persistence operation failed. Nothing was applied."""
