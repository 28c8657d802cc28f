class ValidationError(ValueError):
    """Entry rejected by the transaction form contract."""


class ImportFormatError(ValueError):
    """Backup file could not be read or has no transactions array."""


class ExportError(ValueError):
    """Export precondition not met (e.g. empty month)."""


class StorageError(RuntimeError):
    """Durable write failed."""
