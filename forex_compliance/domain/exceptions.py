"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UsageStoreError(DomainException):
    """LRS usage ledger could not be read or written"""

    pass


class ConversionError(DomainException):
    """Amount could not be converted between currencies"""

    pass


class RatesAPIError(ConversionError):
    """Exchange rate API returned an error or is unavailable"""

    pass
