"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Stored transaction or budget data is malformed"""

    pass


class PersistenceError(DomainException):
    """Database read or write failed"""

    pass
