"""Exceptions raised by the address migration."""


class FatalConfigurationError(Exception):
    """Raised before any record is processed: missing connection settings or store unreachable."""

    pass


class RecordProcessingError(Exception):
    """Raised when a single record cannot be parsed or persisted."""

    def __init__(self, record_id, reason: str):
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"{record_id}: {reason}")
