"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Input violates a domain invariant (negative amount, bad date range, ...)"""

    pass


class NotFoundError(DomainException):
    """Referenced loan, borrower, category or record does not exist"""

    pass
