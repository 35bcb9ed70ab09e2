from typing import Optional


class RecordNotFound(LookupError):
    """Raised by mutating table operations when the target ID is absent."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table}: no record with ID '{record_id}'")


class RemoteUnavailable(RuntimeError):
    """The spreadsheet service failed to answer (network, auth, quota)."""

    def __init__(self, table: str, operation: str, cause: Optional[BaseException] = None):
        self.table = table
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} on '{table}' failed: {cause}")
