"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StorageFetchError(DomainException):
    """A storage fetch feeding the dashboard failed"""

    pass


class RemoteAnalysisError(DomainException):
    """Remote analysis endpoint failed, timed out, or returned garbage"""

    pass


class CsvIngestionError(DomainException):
    """Uploaded file could not be parsed as CSV"""

    pass


class RecordNotFoundError(DomainException):
    """Requested record does not exist"""

    pass
